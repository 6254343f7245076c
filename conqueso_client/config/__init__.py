"""Configuration package for client settings and injected property lookup."""

from .lookup import (
	CONQUESO_URL_PROPERTY,
	JSON_URLS_PROPERTY,
	METADATA_KEY_PREFIX,
	OVERRIDE_PROPERTIES_URLS_PROPERTY,
	POLL_INTERVAL_METADATA_KEY,
	POLLING_DELAY_PROPERTY,
	MappingPropertyLookup,
	PropertyLookupPort,
	config_build_property_lookup,
)
from .settings import ConquesoSettings, SettingsLoadError, config_load_settings

__all__ = [
	"CONQUESO_URL_PROPERTY",
	"JSON_URLS_PROPERTY",
	"METADATA_KEY_PREFIX",
	"OVERRIDE_PROPERTIES_URLS_PROPERTY",
	"POLL_INTERVAL_METADATA_KEY",
	"POLLING_DELAY_PROPERTY",
	"ConquesoSettings",
	"MappingPropertyLookup",
	"PropertyLookupPort",
	"SettingsLoadError",
	"config_build_property_lookup",
	"config_load_settings",
]
