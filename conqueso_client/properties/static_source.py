"""Property definition source backed by a fixed definition collection."""

from __future__ import annotations

from typing import Iterable

from conqueso_client.domain import PropertyDefinition

from .interfaces import PropertyDefinitionSourcePort


class StaticPropertyDefinitionSource(PropertyDefinitionSourcePort):
    """Contribute a caller-supplied definition collection, overwriting existing names.

    Names are expected to be unique within the collection; a repeated name keeps
    its last definition.
    """

    def __init__(self, definitions: Iterable[PropertyDefinition] = ()):
        self._definitions = {definition.name: definition for definition in definitions}

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        definitions.update(self._definitions)
