"""Injected property lookup used in place of process-wide configuration.

Components that need current configuration values receive a
`PropertyLookupPort` instead of reading global state directly, so tests can
pass a fixed mapping and applications can pass the process environment.
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Mapping, Protocol

from .settings import ConquesoSettings

CONQUESO_URL_PROPERTY = "archaius.configurationSource.additionalUrls"
JSON_URLS_PROPERTY = "conqueso.properties.jsonUrls"
OVERRIDE_PROPERTIES_URLS_PROPERTY = "conqueso.properties.overridePropertiesUrls"
METADATA_KEY_PREFIX = "conqueso.metadata."
POLLING_DELAY_PROPERTY = "archaius.fixedDelayPollingScheduler.delayMills"
POLL_INTERVAL_METADATA_KEY = "conqueso.poll.interval"


class PropertyLookupPort(Protocol):
    """Port definition for reading named configuration values."""

    def lookup_get(self, name: str) -> str | None:
        """Return current value for one configuration name.

        Args:
            name: Configuration name.

        Returns:
            str | None: Current value, or None when unset.

        Raises:
            RuntimeError: Raised when the backing store is unavailable.
        """

    def lookup_snapshot(self) -> dict[str, str]:
        """Return a copy of every configuration name and value.

        Returns:
            dict[str, str]: Fresh mapping safe for caller mutation.

        Raises:
            RuntimeError: Raised when the backing store is unavailable.
        """


class MappingPropertyLookup(PropertyLookupPort):
    """Immutable property lookup backed by a snapshot of one mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = MappingProxyType({str(key): str(value) for key, value in (values or {}).items()})

    def lookup_get(self, name: str) -> str | None:
        return self._values.get(name)

    def lookup_snapshot(self) -> dict[str, str]:
        return dict(self._values)


def config_build_property_lookup(
    settings: ConquesoSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> MappingPropertyLookup:
    """Build a property lookup from the process environment and settings.

    Settings fields that are set are published under the recognized dotted
    property names and win over identically named environment entries.

    Args:
        settings: Optional validated settings object.
        environ: Optional environment mapping, defaults to `os.environ`.

    Returns:
        MappingPropertyLookup: Immutable lookup snapshot.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    values = dict(os.environ if environ is None else environ)
    if settings is not None:
        settings_values = {
            CONQUESO_URL_PROPERTY: settings.url,
            JSON_URLS_PROPERTY: settings.json_urls,
            OVERRIDE_PROPERTIES_URLS_PROPERTY: settings.override_properties_urls,
        }
        values.update({key: value for key, value in settings_values.items() if value})
    return MappingPropertyLookup(values)
