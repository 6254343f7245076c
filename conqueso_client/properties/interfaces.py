"""Typed interfaces for property definition sources."""

from typing import Protocol

from conqueso_client.domain import PropertyDefinition


class PropertyDefinitionSourcePort(Protocol):
    """Port definition for components contributing property definitions."""

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        """Add or overwrite entries in a shared definition mapping.

        Args:
            definitions: Mutable mapping from property name to definition.

        Returns:
            None: Mutates the target mapping as side effect.

        Raises:
            ConfigurationError: Raised when the source input is invalid or unreadable.
        """
