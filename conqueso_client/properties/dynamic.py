"""Declarative dynamic property types for configuration classes.

Configuration classes declare properties as class attributes::

    @conqueso_config
    class CacheConfig:
        TTL = DynamicIntProperty("cache.ttl", 300, description="Entry TTL in seconds")

The introspection source reads these declarations to build property
definitions, and application code reads current values through an injected
`PropertyLookupPort`.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Mapping, TypeVar

from conqueso_client.config import PropertyLookupPort
from conqueso_client.domain import (
    DEFAULT_COLLECTION_DELIMITER,
    PropertyType,
    domain_split_collection,
    domain_split_mapping,
)
from conqueso_client.errors import ConfigurationError

ValueT = TypeVar("ValueT")


class DynamicProperty(Generic[ValueT]):
    """Named configuration value with a default and a typed parser.

    Attributes:
        name: Property name published to the Conqueso server.
        default: Default value, or None when the property has no default.
        description: Optional human-readable description.
    """

    def __init__(self, name: str, default: ValueT | None = None, description: str = ""):
        self.name = name
        self.default = default
        self.description = description or ""

    def property_parse(self, text: str) -> ValueT:
        """Parse one raw configuration value into the property value type.

        Args:
            text: Raw configuration value.

        Returns:
            ValueT: Parsed value.

        Raises:
            ValueError: Raised when text cannot be parsed.
        """

        raise NotImplementedError

    def property_get(self, lookup: PropertyLookupPort) -> ValueT | None:
        """Return current value from a lookup, falling back to the default.

        Args:
            lookup: Property lookup providing current values.

        Returns:
            ValueT | None: Parsed current value, or default when unset or unparsable.

        Raises:
            RuntimeError: Raised when the lookup backing store is unavailable.
        """

        raw_value = lookup.lookup_get(self.name)
        if raw_value is None:
            return self.property_default()
        try:
            return self.property_parse(raw_value)
        except ValueError:
            return self.property_default()

    def property_default(self) -> ValueT | None:
        """Return the default value handed to callers; collections return copies."""

        return self.default

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, default={self.default!r})"


class DynamicBooleanProperty(DynamicProperty[bool]):
    def property_parse(self, text: str) -> bool:
        normalized_text = text.strip().lower()
        if normalized_text == "true":
            return True
        if normalized_text == "false":
            return False
        raise ValueError(f"not a boolean: {text!r}")


class DynamicDoubleProperty(DynamicProperty[float]):
    def property_parse(self, text: str) -> float:
        return float(text.strip())


class DynamicFloatProperty(DynamicProperty[float]):
    def property_parse(self, text: str) -> float:
        return float(text.strip())


class DynamicIntProperty(DynamicProperty[int]):
    def property_parse(self, text: str) -> int:
        return int(text.strip())


class DynamicLongProperty(DynamicProperty[int]):
    def property_parse(self, text: str) -> int:
        return int(text.strip())


class DynamicStringProperty(DynamicProperty[str]):
    def property_parse(self, text: str) -> str:
        return text


class DynamicStringListProperty(DynamicProperty[list[str]]):
    """List property; current values are split on the configured delimiter."""

    def __init__(
        self,
        name: str,
        default: Iterable[str] | None = None,
        description: str = "",
        delimiter: str = DEFAULT_COLLECTION_DELIMITER,
    ):
        super().__init__(name, None if default is None else list(default), description)
        self.delimiter = delimiter

    def property_default(self) -> list[str] | None:
        return None if self.default is None else list(self.default)

    def property_parse(self, text: str) -> list[str]:
        return domain_split_collection(text, self.delimiter)


class DynamicStringSetProperty(DynamicProperty[tuple[str, ...]]):
    """Set property; defaults keep first-seen order of unique items."""

    def __init__(
        self,
        name: str,
        default: Iterable[str] | None = None,
        description: str = "",
        delimiter: str = DEFAULT_COLLECTION_DELIMITER,
    ):
        super().__init__(name, None if default is None else tuple(dict.fromkeys(default)), description)
        self.delimiter = delimiter

    def property_parse(self, text: str) -> tuple[str, ...]:
        return tuple(dict.fromkeys(domain_split_collection(text, self.delimiter)))


class DynamicStringMapProperty(DynamicProperty[dict[str, str]]):
    """Map property; current values use `key=value` pairs split on the delimiter."""

    def __init__(
        self,
        name: str,
        default: Mapping[str, str] | None = None,
        description: str = "",
        delimiter: str = DEFAULT_COLLECTION_DELIMITER,
    ):
        super().__init__(name, None if default is None else dict(default), description)
        self.delimiter = delimiter

    def property_default(self) -> dict[str, str] | None:
        return None if self.default is None else dict(self.default)

    def property_parse(self, text: str) -> dict[str, str]:
        return domain_split_mapping(text, self.delimiter)


PROPERTY_TYPE_BY_CLASS: dict[type[DynamicProperty[Any]], PropertyType] = {
    DynamicBooleanProperty: PropertyType.BOOLEAN,
    DynamicDoubleProperty: PropertyType.DOUBLE,
    DynamicFloatProperty: PropertyType.FLOAT,
    DynamicIntProperty: PropertyType.INT,
    DynamicLongProperty: PropertyType.LONG,
    DynamicStringProperty: PropertyType.STRING,
    DynamicStringListProperty: PropertyType.STRING_LIST,
    DynamicStringMapProperty: PropertyType.STRING_MAP,
    DynamicStringSetProperty: PropertyType.STRING_SET,
}


def dynamic_property_type(dynamic_property: DynamicProperty[Any]) -> PropertyType:
    """Resolve property type member for one concrete dynamic property class.

    Args:
        dynamic_property: Declared dynamic property.

    Returns:
        PropertyType: Matching type member.

    Raises:
        ConfigurationError: Raised when the concrete class is not recognized.
    """

    property_type = PROPERTY_TYPE_BY_CLASS.get(type(dynamic_property))
    if property_type is None:
        raise ConfigurationError(f"Unsupported dynamic property class {type(dynamic_property).__qualname__}")
    return property_type
