"""Regression tests for ordered property definition source composition."""

from __future__ import annotations

import pytest

from conqueso_client.domain import PropertyDefinition, PropertyType
from conqueso_client.errors import ConfigurationError
from conqueso_client.properties import (
    CompositePropertyDefinitionSource,
    IntrospectionPropertyDefinitionSource,
    JsonFilePropertyDefinitionSource,
    PropertiesFileOverrideSource,
    StaticPropertyDefinitionSource,
    properties_compose,
)
from property_assertions import assert_contains_property, fixture_url
from sample_configs.example_config import ExampleConfig


class _FailingSource:
    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        raise ConfigurationError("Source is broken")


class _RecordingSource:
    def __init__(self) -> None:
        self.calls = 0

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        self.calls += 1


def test_properties_compose_applies_sources_in_order() -> None:
    """Let later sources override earlier ones for the same name.

    Returns:
        None: Assertions validate last-write-wins composition.

    Raises:
        AssertionError: Raised when source order is not honored.
    """

    definitions = properties_compose(
        [
            IntrospectionPropertyDefinitionSource([ExampleConfig]),
            JsonFilePropertyDefinitionSource(fixture_url("override-valid.json")),
            PropertiesFileOverrideSource(fixture_url("override.properties")),
        ]
    )

    assert_contains_property(definitions, "string1", PropertyType.STRING, "bar")
    assert_contains_property(definitions, "stringList1", PropertyType.STRING_LIST, "foo,bar,baz,bingo")
    assert_contains_property(definitions, "int1", PropertyType.INT, "84")
    assert "unknown1" not in definitions


def test_properties_compose_reversed_order_changes_winner() -> None:
    """Apply the JSON document first so that introspection defaults collide.

    Returns:
        None: Assertions validate reordered composition.

    Raises:
        AssertionError: Raised when order-dependent results are incorrect.
    """

    first = StaticPropertyDefinitionSource(
        [PropertyDefinition(name="string1", type=PropertyType.STRING, value="static")]
    )
    second = JsonFilePropertyDefinitionSource(fixture_url("override-valid.json"))

    assert properties_compose([first, second])["string1"].value == "foobar"
    assert properties_compose([second, first])["string1"].value == "static"


def test_properties_compose_returns_read_only_mapping() -> None:
    definitions = properties_compose([StaticPropertyDefinitionSource()])

    assert dict(definitions) == {}
    with pytest.raises(TypeError):
        definitions["foo"] = PropertyDefinition(name="foo", type=PropertyType.STRING)  # type: ignore[index]


def test_properties_compose_stops_at_first_failing_source() -> None:
    """Abort composition without applying later sources.

    Returns:
        None: Assertions validate fail-fast behavior.

    Raises:
        AssertionError: Raised when later sources still run.
    """

    recording_source = _RecordingSource()

    with pytest.raises(ConfigurationError, match="Source is broken"):
        properties_compose([StaticPropertyDefinitionSource(), _FailingSource(), recording_source])

    assert recording_source.calls == 0


def test_properties_composite_source_exposes_children_and_contributes() -> None:
    static_source = StaticPropertyDefinitionSource(
        [
            PropertyDefinition(name="foo", type=PropertyType.STRING, value="first"),
            PropertyDefinition(name="foo", type=PropertyType.STRING, value="second"),
        ]
    )
    composite = CompositePropertyDefinitionSource([static_source])
    definitions: dict[str, PropertyDefinition] = {}

    composite.source_contribute(definitions)

    assert composite.sources == (static_source,)
    assert definitions == {"foo": PropertyDefinition(name="foo", type=PropertyType.STRING, value="second")}
