"""Conqueso server timestamp parsing helpers."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from conqueso_client.errors import ValidationError

CONQUESO_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
_CONQUESO_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", re.ASCII)


def domain_parse_conqueso_timestamp(value: str) -> datetime:
    """Parse one server timestamp in `yyyy-MM-dd'T'HH:mm:ss.SSS'Z'` form.

    Args:
        value: Timestamp text from a role or instance record.

    Returns:
        datetime: Timezone-aware UTC datetime.

    Raises:
        ValidationError: Raised when value does not match the server pattern.
    """

    if not isinstance(value, str) or not _CONQUESO_TIMESTAMP_PATTERN.match(value):
        raise ValidationError(f"Unsupported Conqueso timestamp: {value!r}")
    try:
        parsed_value = datetime.strptime(value, CONQUESO_TIMESTAMP_FORMAT)
    except ValueError as error:
        raise ValidationError(f"Unsupported Conqueso timestamp: {value!r}") from error
    return parsed_value.replace(tzinfo=timezone.utc)
