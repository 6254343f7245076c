"""Property definition source reading dynamic property declarations from types."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from conqueso_client.domain import (
    DEFAULT_COLLECTION_DELIMITER,
    PropertyDefinition,
    domain_format_scalar,
    domain_join_collection,
    domain_join_mapping,
)
from conqueso_client.errors import ConfigurationError

from .dynamic import (
    DynamicProperty,
    DynamicStringListProperty,
    DynamicStringMapProperty,
    DynamicStringSetProperty,
    dynamic_property_type,
)
from .interfaces import PropertyDefinitionSourcePort

logger = logging.getLogger(__name__)


class IntrospectionPropertyDefinitionSource(PropertyDefinitionSourcePort):
    """Scan configuration classes or modules for declared dynamic properties.

    Only attributes defined directly on each target are considered; inherited
    declarations belong to the base type and are reported when the base type
    itself is scanned.
    """

    def __init__(
        self,
        target_types: Iterable[object],
        collection_delimiter: str = DEFAULT_COLLECTION_DELIMITER,
    ):
        """Initialize introspection source.

        Args:
            target_types: Classes or modules declaring dynamic properties.
            collection_delimiter: Delimiter for list, set and map defaults.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ConfigurationError: Raised when no targets or no delimiter are given.
        """

        normalized_targets = tuple(target_types)
        if not normalized_targets:
            raise ConfigurationError("No configuration types specified for property introspection")
        if not collection_delimiter:
            raise ConfigurationError("collection_delimiter must not be empty")

        self._target_types = normalized_targets
        self._collection_delimiter = collection_delimiter

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        """Add one definition per declared dynamic property of every target.

        Args:
            definitions: Mutable mapping from property name to definition.

        Returns:
            None: Mutates the target mapping as side effect.

        Raises:
            ConfigurationError: Raised for unnamed, unsupported or duplicate properties.
        """

        for target_type in self._target_types:
            self._introspection_add_target(definitions, target_type)

    def _introspection_add_target(self, definitions: dict[str, PropertyDefinition], target_type: object) -> None:
        declared_properties = [
            (attribute_name, attribute_value)
            for attribute_name, attribute_value in vars(target_type).items()
            if isinstance(attribute_value, DynamicProperty)
        ]
        if not declared_properties:
            logger.warning("No dynamic properties declared on %s", _introspection_target_label(target_type))

        for attribute_name, dynamic_property in declared_properties:
            location = f"{_introspection_target_label(target_type)}.{attribute_name}"
            property_name = dynamic_property.name
            if not property_name:
                raise ConfigurationError(f"Dynamic property without name value - {location}")
            if property_name in definitions:
                raise ConfigurationError(f"Duplicate property name {property_name} - {location}")

            property_type = dynamic_property_type(dynamic_property)
            definitions[property_name] = PropertyDefinition(
                name=property_name,
                type=property_type,
                value=self._introspection_encode_default(dynamic_property),
                description=dynamic_property.description,
            )

    def _introspection_encode_default(self, dynamic_property: DynamicProperty[Any]) -> str:
        default_value = dynamic_property.default
        if default_value is None:
            return ""
        if isinstance(dynamic_property, DynamicStringMapProperty):
            return domain_join_mapping(default_value, self._collection_delimiter)
        if isinstance(dynamic_property, (DynamicStringListProperty, DynamicStringSetProperty)):
            return domain_join_collection(default_value, self._collection_delimiter)
        return domain_format_scalar(default_value)


def _introspection_target_label(target_type: object) -> str:
    module_name = getattr(target_type, "__module__", None)
    qualified_name = getattr(target_type, "__qualname__", None) or getattr(target_type, "__name__", repr(target_type))
    if module_name and module_name != qualified_name:
        return f"{module_name}.{qualified_name}"
    return str(qualified_name)
