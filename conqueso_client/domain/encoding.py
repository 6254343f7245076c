"""Delimiter-based encoding of collection defaults into single strings.

Delimiter characters occurring inside elements, keys or values are not
escaped, so encoded values containing the delimiter cannot be split back
unambiguously.
"""

from __future__ import annotations

from typing import Iterable, Mapping

DEFAULT_COLLECTION_DELIMITER = ","
MAP_KEY_VALUE_SEPARATOR = "="


def domain_format_scalar(value: object) -> str:
    """Return canonical string form of one scalar default.

    Args:
        value: Scalar value.

    Returns:
        str: String form, with booleans rendered as `true`/`false`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def domain_join_collection(values: Iterable[object], delimiter: str = DEFAULT_COLLECTION_DELIMITER) -> str:
    """Join string forms of ordered elements with a delimiter.

    Args:
        values: Elements in the order they should appear.
        delimiter: Separator placed between elements.

    Returns:
        str: Joined text, empty for empty input.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return delimiter.join(domain_format_scalar(value) for value in values)


def domain_join_mapping(values: Mapping[object, object], delimiter: str = DEFAULT_COLLECTION_DELIMITER) -> str:
    """Join `key=value` pairs of a mapping with a delimiter.

    Args:
        values: Mapping whose iteration order is preserved.
        delimiter: Separator placed between pairs.

    Returns:
        str: Joined text, empty for empty input.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return delimiter.join(
        f"{domain_format_scalar(key)}{MAP_KEY_VALUE_SEPARATOR}{domain_format_scalar(value)}"
        for key, value in values.items()
    )


def domain_split_collection(text: str, delimiter: str = DEFAULT_COLLECTION_DELIMITER) -> list[str]:
    """Split delimited text into trimmed non-empty elements."""

    if not text:
        return []
    return [item.strip() for item in text.split(delimiter) if item.strip()]


def domain_split_mapping(text: str, delimiter: str = DEFAULT_COLLECTION_DELIMITER) -> dict[str, str]:
    """Split delimited `key=value` text into an ordered mapping.

    Entries without a separator map to an empty value.
    """

    result: dict[str, str] = {}
    for item in domain_split_collection(text, delimiter):
        key, _, value = item.partition(MAP_KEY_VALUE_SEPARATOR)
        result[key.strip()] = value.strip()
    return result
