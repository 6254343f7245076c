"""Domain models and encoding helpers used across client layers."""

from .encoding import (
	DEFAULT_COLLECTION_DELIMITER,
	MAP_KEY_VALUE_SEPARATOR,
	domain_format_scalar,
	domain_join_collection,
	domain_join_mapping,
	domain_split_collection,
	domain_split_mapping,
)
from .models import (
	InstanceInfo,
	PropertyDefinition,
	PropertyType,
	RoleInfo,
	definition_from_payload,
	instance_from_payload,
	role_from_payload,
)
from .properties_text import domain_parse_properties_text
from .timestamps import CONQUESO_TIMESTAMP_FORMAT, domain_parse_conqueso_timestamp

__all__ = [
	"CONQUESO_TIMESTAMP_FORMAT",
	"DEFAULT_COLLECTION_DELIMITER",
	"MAP_KEY_VALUE_SEPARATOR",
	"InstanceInfo",
	"PropertyDefinition",
	"PropertyType",
	"RoleInfo",
	"definition_from_payload",
	"domain_format_scalar",
	"domain_join_collection",
	"domain_join_mapping",
	"domain_parse_conqueso_timestamp",
	"domain_parse_properties_text",
	"domain_split_collection",
	"domain_split_mapping",
	"instance_from_payload",
	"role_from_payload",
]
