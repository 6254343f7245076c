"""Property definition sources and their composition engine."""

from .composition import CompositePropertyDefinitionSource, properties_compose
from .dynamic import (
	PROPERTY_TYPE_BY_CLASS,
	DynamicBooleanProperty,
	DynamicDoubleProperty,
	DynamicFloatProperty,
	DynamicIntProperty,
	DynamicLongProperty,
	DynamicProperty,
	DynamicStringListProperty,
	DynamicStringMapProperty,
	DynamicStringProperty,
	DynamicStringSetProperty,
	dynamic_property_type,
)
from .interfaces import PropertyDefinitionSourcePort
from .introspection import IntrospectionPropertyDefinitionSource
from .manifest import DEFAULT_MANIFEST, ConfigurationManifest, ManifestScanPropertyDefinitionSource, conqueso_config
from .static_source import StaticPropertyDefinitionSource
from .url_sources import JsonFilePropertyDefinitionSource, PropertiesFileOverrideSource, UrlPropertyDefinitionSource

__all__ = [
	"DEFAULT_MANIFEST",
	"PROPERTY_TYPE_BY_CLASS",
	"CompositePropertyDefinitionSource",
	"ConfigurationManifest",
	"DynamicBooleanProperty",
	"DynamicDoubleProperty",
	"DynamicFloatProperty",
	"DynamicIntProperty",
	"DynamicLongProperty",
	"DynamicProperty",
	"DynamicStringListProperty",
	"DynamicStringMapProperty",
	"DynamicStringProperty",
	"DynamicStringSetProperty",
	"IntrospectionPropertyDefinitionSource",
	"JsonFilePropertyDefinitionSource",
	"ManifestScanPropertyDefinitionSource",
	"PropertiesFileOverrideSource",
	"PropertyDefinitionSourcePort",
	"StaticPropertyDefinitionSource",
	"UrlPropertyDefinitionSource",
	"conqueso_config",
	"dynamic_property_type",
	"properties_compose",
]
