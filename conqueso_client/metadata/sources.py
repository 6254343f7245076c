"""Static, process-property and composite instance metadata sources."""

from __future__ import annotations

from typing import Final, Iterable, Mapping

from conqueso_client.config import (
    METADATA_KEY_PREFIX,
    POLL_INTERVAL_METADATA_KEY,
    POLLING_DELAY_PROPERTY,
    PropertyLookupPort,
    config_build_property_lookup,
)

from .interfaces import InstanceMetadataSourcePort


class StaticInstanceMetadataSource(InstanceMetadataSourcePort):
    """Return a fixed metadata mapping supplied at construction."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = {str(key): str(value) for key, value in (values or {}).items()}

    def metadata_collect(self) -> dict[str, str]:
        return dict(self._values)


class ProcessPropertiesInstanceMetadataSource(InstanceMetadataSourcePort):
    """Extract metadata from process-level properties.

    Keys starting with `conqueso.metadata.` are reported with the prefix
    stripped. Keys in the translation table are reported under their
    translated name regardless of prefix.
    """

    KEY_TRANSLATION: Final[dict[str, str]] = {
        POLLING_DELAY_PROPERTY: POLL_INTERVAL_METADATA_KEY,
    }

    def __init__(self, lookup: PropertyLookupPort | None = None):
        self._lookup = lookup

    def metadata_collect(self) -> dict[str, str]:
        lookup = self._lookup or config_build_property_lookup()
        return self.metadata_from_properties(lookup.lookup_snapshot())

    def metadata_from_properties(self, properties: Mapping[str, str]) -> dict[str, str]:
        """Select and rename metadata entries from one property mapping.

        Args:
            properties: Process-level property names and values.

        Returns:
            dict[str, str]: Instance metadata entries.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        metadata: dict[str, str] = {}
        for key, value in properties.items():
            if key in self.KEY_TRANSLATION:
                metadata[self.KEY_TRANSLATION[key]] = value
            elif key.startswith(METADATA_KEY_PREFIX):
                metadata[key[len(METADATA_KEY_PREFIX) :]] = value
        return metadata


class CompositeInstanceMetadataSource(InstanceMetadataSourcePort):
    """Merge child sources in order; later sources win on key conflicts."""

    def __init__(self, sources: Iterable[InstanceMetadataSourcePort]):
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[InstanceMetadataSourcePort, ...]:
        return self._sources

    def metadata_collect(self) -> dict[str, str]:
        metadata: dict[str, str] = {}
        for source in self._sources:
            metadata.update(source.metadata_collect())
        return metadata
