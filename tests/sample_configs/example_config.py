"""Sample configuration types declaring dynamic properties."""

from conqueso_client.properties import (
    DynamicIntProperty,
    DynamicStringListProperty,
    DynamicStringMapProperty,
    DynamicStringProperty,
    DynamicStringSetProperty,
    conqueso_config,
)


@conqueso_config
class ExampleConfig:
    STRING1 = DynamicStringProperty("string1", "foo", description="foo description")
    STRING_NULL = DynamicStringProperty("string3", None)
    INT1 = DynamicIntProperty("int1", 42)
    STRING_LIST1 = DynamicStringListProperty("stringList1", ["foo", "bar", "baz"])
    STRING_SET1 = DynamicStringSetProperty("stringSet1", ["baz", "foo", "bar"])
    STRING_MAP1 = DynamicStringMapProperty("stringMap1", {"k3": "v3", "k1": "v1", "k2": "v2"})


class UnmarkedConfig:
    UNMARKED1 = DynamicStringProperty("unmarked1", "hidden")
