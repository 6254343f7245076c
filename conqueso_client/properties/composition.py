"""Ordered composition of property definition sources."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from conqueso_client.domain import PropertyDefinition

from .interfaces import PropertyDefinitionSourcePort


class CompositePropertyDefinitionSource(PropertyDefinitionSourcePort):
    """Apply child sources in order so later sources override earlier ones."""

    def __init__(self, sources: Iterable[PropertyDefinitionSourcePort]):
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[PropertyDefinitionSourcePort, ...]:
        return self._sources

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        for source in self._sources:
            source.source_contribute(definitions)


def properties_compose(sources: Iterable[PropertyDefinitionSourcePort]) -> Mapping[str, PropertyDefinition]:
    """Build one frozen definition set by applying sources in order.

    There is no rollback: the first failing source aborts composition and the
    partially built set is discarded.

    Args:
        sources: Definition sources in application order.

    Returns:
        Mapping[str, PropertyDefinition]: Read-only mapping from name to definition.

    Raises:
        ConfigurationError: Raised when any source fails.
    """

    definitions: dict[str, PropertyDefinition] = {}
    CompositePropertyDefinitionSource(sources).source_contribute(definitions)
    return MappingProxyType(definitions)
