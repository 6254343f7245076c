"""Conqueso client: instance registration and property definition aggregation."""

from .bootstrap import bootstrap_initialize_client
from .client import ConquesoClient
from .domain import InstanceInfo, PropertyDefinition, PropertyType, RoleInfo, domain_parse_conqueso_timestamp
from .errors import CommunicationError, ConfigurationError, ConquesoError, ValidationError

__all__ = [
	"CommunicationError",
	"ConfigurationError",
	"ConquesoClient",
	"ConquesoError",
	"InstanceInfo",
	"PropertyDefinition",
	"PropertyType",
	"RoleInfo",
	"ValidationError",
	"bootstrap_initialize_client",
	"domain_parse_conqueso_timestamp",
]
