"""Regression tests for dynamic property declarations and introspection scanning."""

from __future__ import annotations

import logging

import pytest

from conqueso_client.config import MappingPropertyLookup
from conqueso_client.domain import PropertyDefinition, PropertyType
from conqueso_client.errors import ConfigurationError
from conqueso_client.properties import (
    DynamicBooleanProperty,
    DynamicDoubleProperty,
    DynamicIntProperty,
    DynamicStringListProperty,
    DynamicStringMapProperty,
    DynamicStringProperty,
    DynamicStringSetProperty,
    IntrospectionPropertyDefinitionSource,
)
from property_assertions import assert_contains_property, assert_example_config_properties
from sample_configs.example_config import ExampleConfig


class _BaseConfig:
    BASE1 = DynamicStringProperty("base1", "inherited")


class _DerivedConfig(_BaseConfig):
    DERIVED1 = DynamicBooleanProperty("derived1", True)


class _UnnamedConfig:
    UNNAMED = DynamicStringProperty("", "value")


class _CustomStringProperty(DynamicStringProperty):
    pass


class _UnsupportedConfig:
    CUSTOM = _CustomStringProperty("custom1", "value")


class _DuplicateConfig:
    FIRST = DynamicStringProperty("string1", "first")


class _EmptyConfig:
    NOT_A_PROPERTY = "plain value"


def test_properties_introspection_finds_all_declared_properties() -> None:
    """Build exactly one definition per declared property with encoded defaults.

    Returns:
        None: Assertions validate discovered definitions.

    Raises:
        AssertionError: Raised when discovered definitions are incorrect.
    """

    definitions: dict[str, PropertyDefinition] = {}

    IntrospectionPropertyDefinitionSource([ExampleConfig]).source_contribute(definitions)

    assert len(definitions) == 6
    assert_example_config_properties(definitions)
    assert [definitions[name].type for name in ("string1", "string3", "int1", "stringList1", "stringSet1", "stringMap1")] == [
        PropertyType.STRING,
        PropertyType.STRING,
        PropertyType.INT,
        PropertyType.STRING_LIST,
        PropertyType.STRING_SET,
        PropertyType.STRING_MAP,
    ]


def test_properties_introspection_uses_alternate_delimiter() -> None:
    """Encode collection defaults with a custom delimiter.

    Returns:
        None: Assertions validate delimiter usage.

    Raises:
        AssertionError: Raised when collection defaults are encoded incorrectly.
    """

    definitions: dict[str, PropertyDefinition] = {}

    IntrospectionPropertyDefinitionSource([ExampleConfig], collection_delimiter=";;").source_contribute(definitions)

    assert_contains_property(definitions, "stringList1", PropertyType.STRING_LIST, "foo;;bar;;baz")
    assert_contains_property(definitions, "stringSet1", PropertyType.STRING_SET, "baz;;foo;;bar")
    assert_contains_property(definitions, "stringMap1", PropertyType.STRING_MAP, "k3=v3;;k1=v1;;k2=v2")


def test_properties_introspection_ignores_inherited_declarations() -> None:
    """Report only attributes defined directly on each scanned type."""

    definitions: dict[str, PropertyDefinition] = {}

    IntrospectionPropertyDefinitionSource([_DerivedConfig]).source_contribute(definitions)

    assert definitions == {
        "derived1": PropertyDefinition(name="derived1", type=PropertyType.BOOLEAN, value="true"),
    }


def test_properties_introspection_rejects_duplicate_names() -> None:
    """Abort the scan when two declarations produce the same name.

    Returns:
        None: Assertions validate duplicate detection.

    Raises:
        AssertionError: Raised when duplicates are silently overwritten.
    """

    source = IntrospectionPropertyDefinitionSource([ExampleConfig, _DuplicateConfig])

    with pytest.raises(ConfigurationError, match="Duplicate property name string1"):
        source.source_contribute({})


def test_properties_introspection_rejects_existing_names_in_target() -> None:
    definitions = {"int1": PropertyDefinition(name="int1", type=PropertyType.INT, value="1")}

    with pytest.raises(ConfigurationError, match="Duplicate property name int1"):
        IntrospectionPropertyDefinitionSource([ExampleConfig]).source_contribute(definitions)


def test_properties_introspection_rejects_unnamed_and_unsupported_properties() -> None:
    """Fail for empty property names and unrecognized property classes.

    Returns:
        None: Assertions validate configuration failures.

    Raises:
        AssertionError: Raised when invalid declarations are accepted.
    """

    with pytest.raises(ConfigurationError, match="without name"):
        IntrospectionPropertyDefinitionSource([_UnnamedConfig]).source_contribute({})
    with pytest.raises(ConfigurationError, match="Unsupported dynamic property class"):
        IntrospectionPropertyDefinitionSource([_UnsupportedConfig]).source_contribute({})


def test_properties_introspection_warns_for_types_without_properties(caplog: pytest.LogCaptureFixture) -> None:
    """Log a warning, not an error, for types declaring no properties.

    Args:
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate warning behavior.

    Raises:
        AssertionError: Raised when empty types fail or are not reported.
    """

    definitions: dict[str, PropertyDefinition] = {}

    with caplog.at_level(logging.WARNING, logger="conqueso_client.properties.introspection"):
        IntrospectionPropertyDefinitionSource([_EmptyConfig]).source_contribute(definitions)

    assert definitions == {}
    assert "No dynamic properties declared" in caplog.text


def test_properties_introspection_requires_targets() -> None:
    with pytest.raises(ConfigurationError):
        IntrospectionPropertyDefinitionSource([])


def test_properties_dynamic_property_get_reads_injected_lookup() -> None:
    """Read current values through the lookup and fall back to defaults.

    Returns:
        None: Assertions validate typed value resolution.

    Raises:
        AssertionError: Raised when current values are resolved incorrectly.
    """

    lookup = MappingPropertyLookup(
        {
            "int1": "84",
            "double1": "not-a-number",
            "list1": "a;b",
            "set1": "x,y,x",
            "map1": "k1=v1,k2=v2",
        }
    )

    assert DynamicIntProperty("int1", 42).property_get(lookup) == 84
    assert DynamicDoubleProperty("double1", 6.28).property_get(lookup) == 6.28
    assert DynamicStringProperty("missing", "fallback").property_get(lookup) == "fallback"
    assert DynamicStringListProperty("list1", [], delimiter=";").property_get(lookup) == ["a", "b"]
    assert DynamicStringSetProperty("set1").property_get(lookup) == ("x", "y")
    assert DynamicStringMapProperty("map1").property_get(lookup) == {"k1": "v1", "k2": "v2"}


class _MutableDefaultsConfig:
    HOSTS = DynamicStringListProperty("hosts", ["a", "b"])
    LABELS = DynamicStringMapProperty("labels", {"k1": "v1"})


def test_properties_dynamic_property_get_returns_default_copies() -> None:
    """Keep declared defaults intact when callers mutate returned values.

    Returns:
        None: Assertions validate default isolation.

    Raises:
        AssertionError: Raised when caller mutation leaks into declared defaults.
    """

    empty_lookup = MappingPropertyLookup({})
    hosts = _MutableDefaultsConfig.HOSTS.property_get(empty_lookup)
    labels = _MutableDefaultsConfig.LABELS.property_get(empty_lookup)
    hosts.append("mutated")
    labels["k2"] = "mutated"
    definitions: dict[str, PropertyDefinition] = {}

    IntrospectionPropertyDefinitionSource([_MutableDefaultsConfig]).source_contribute(definitions)

    assert_contains_property(definitions, "hosts", PropertyType.STRING_LIST, "a,b")
    assert_contains_property(definitions, "labels", PropertyType.STRING_MAP, "k1=v1")
    assert _MutableDefaultsConfig.HOSTS.property_get(empty_lookup) == ["a", "b"]
