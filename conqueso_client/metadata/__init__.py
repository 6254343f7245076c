"""Instance metadata sources describing the running service instance."""

from .cloud import (
	DEFAULT_METADATA_LOOKUPS,
	EC2_METADATA_ROOT,
	EC2_METADATA_SERVICE_URL,
	CloudInstanceMetadataSource,
	MetadataLookup,
)
from .interfaces import InstanceMetadataSourcePort
from .sources import (
	CompositeInstanceMetadataSource,
	ProcessPropertiesInstanceMetadataSource,
	StaticInstanceMetadataSource,
)

__all__ = [
	"DEFAULT_METADATA_LOOKUPS",
	"EC2_METADATA_ROOT",
	"EC2_METADATA_SERVICE_URL",
	"CloudInstanceMetadataSource",
	"CompositeInstanceMetadataSource",
	"InstanceMetadataSourcePort",
	"MetadataLookup",
	"ProcessPropertiesInstanceMetadataSource",
	"StaticInstanceMetadataSource",
]
