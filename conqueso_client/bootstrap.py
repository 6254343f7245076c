"""Client bootstrap wiring for startup registration with the Conqueso server."""

from __future__ import annotations

import logging
from typing import Final, Iterable, Mapping
from urllib.parse import urlparse

import httpx

from conqueso_client.client import HTTP_SCHEMES, ConquesoClient
from conqueso_client.config import (
    CONQUESO_URL_PROPERTY,
    ConquesoSettings,
    PropertyLookupPort,
    config_build_property_lookup,
    config_load_settings,
)
from conqueso_client.errors import CommunicationError, ConfigurationError
from conqueso_client.metadata import (
    CloudInstanceMetadataSource,
    CompositeInstanceMetadataSource,
    InstanceMetadataSourcePort,
    ProcessPropertiesInstanceMetadataSource,
    StaticInstanceMetadataSource,
)
from conqueso_client.properties import (
    DEFAULT_MANIFEST,
    CompositePropertyDefinitionSource,
    ConfigurationManifest,
    IntrospectionPropertyDefinitionSource,
    JsonFilePropertyDefinitionSource,
    ManifestScanPropertyDefinitionSource,
    PropertiesFileOverrideSource,
    PropertyDefinitionSourcePort,
    properties_compose,
)

logger = logging.getLogger(__name__)

SUPPORTED_CONQUESO_URL_SCHEMES: Final[frozenset[str]] = HTTP_SCHEMES | {"file"}


def bootstrap_resolve_conqueso_url(conqueso_url: str | None, lookup: PropertyLookupPort) -> str:
    """Resolve the Conqueso server URL from an explicit value or the lookup.

    Args:
        conqueso_url: Explicit URL, takes precedence when set.
        lookup: Property lookup holding a comma-separated URL list.

    Returns:
        str: Resolved base URL.

    Raises:
        ConfigurationError: Raised when no URL is configured or the URL has no supported scheme.
    """

    resolved_url = (conqueso_url or "").strip()
    if not resolved_url:
        configured_urls = lookup.lookup_get(CONQUESO_URL_PROPERTY) or ""
        resolved_url = configured_urls.split(",")[0].strip()
    if not resolved_url:
        raise ConfigurationError(
            f"Conqueso URL not specified on the initializer and not set using property {CONQUESO_URL_PROPERTY}"
        )

    parsed_url = urlparse(resolved_url)
    if parsed_url.scheme.lower() not in SUPPORTED_CONQUESO_URL_SCHEMES:
        raise ConfigurationError(f"Bad URL for Conqueso server: {resolved_url}", url=resolved_url)
    return resolved_url


def bootstrap_create_default_instance_metadata_source(
    settings: ConquesoSettings,
    lookup: PropertyLookupPort,
) -> InstanceMetadataSourcePort:
    """Build the default instance metadata source: cloud metadata, then process properties.

    Args:
        settings: Validated client settings.
        lookup: Property lookup for process-level properties.

    Returns:
        InstanceMetadataSourcePort: Composite metadata source.

    Raises:
        ValueError: Raised when metadata service settings are invalid.
    """

    return CompositeInstanceMetadataSource(
        [
            CloudInstanceMetadataSource(
                service_url=settings.metadata_service_url,
                timeout_seconds=settings.metadata_timeout_seconds,
            ),
            ProcessPropertiesInstanceMetadataSource(lookup=lookup),
        ]
    )


def bootstrap_create_default_property_definition_source(
    lookup: PropertyLookupPort,
    configuration_types: Iterable[object] | None = None,
    scan_packages: Iterable[str] | None = None,
    manifest: ConfigurationManifest = DEFAULT_MANIFEST,
    collection_delimiter: str = ",",
    request_timeout_seconds: float = 10.0,
) -> PropertyDefinitionSourcePort:
    """Build the default ordered definition source chain.

    Order: manifest scan, explicit configuration types, JSON documents,
    properties overrides. Later sources win.

    Args:
        lookup: Property lookup holding document URL lists.
        configuration_types: Classes or modules to introspect directly.
        scan_packages: Package roots whose manifest types are introspected.
        manifest: Manifest used for the package scan.
        collection_delimiter: Delimiter for list, set and map defaults.
        request_timeout_seconds: Timeout for remote document reads.

    Returns:
        PropertyDefinitionSourcePort: Composite definition source.

    Raises:
        ConfigurationError: Raised when scan packages or types are given but empty.
    """

    sources: list[PropertyDefinitionSourcePort] = []
    if scan_packages is not None:
        sources.append(
            ManifestScanPropertyDefinitionSource(
                scan_packages,
                manifest=manifest,
                collection_delimiter=collection_delimiter,
            )
        )
    if configuration_types is not None:
        sources.append(
            IntrospectionPropertyDefinitionSource(configuration_types, collection_delimiter=collection_delimiter)
        )
    if scan_packages is None and configuration_types is None:
        logger.warning("No configuration types or configuration scan have been configured")

    sources.append(JsonFilePropertyDefinitionSource(lookup=lookup, request_timeout_seconds=request_timeout_seconds))
    sources.append(PropertiesFileOverrideSource(lookup=lookup, request_timeout_seconds=request_timeout_seconds))
    return CompositePropertyDefinitionSource(sources)


def bootstrap_initialize_client(
    conqueso_url: str | None = None,
    instance_metadata: Mapping[str, str] | InstanceMetadataSourcePort | None = None,
    skip_instance_metadata: bool = False,
    property_definition_source: PropertyDefinitionSourcePort | None = None,
    configuration_types: Iterable[object] | None = None,
    scan_packages: Iterable[str] | None = None,
    manifest: ConfigurationManifest = DEFAULT_MANIFEST,
    collection_delimiter: str | None = None,
    settings: ConquesoSettings | None = None,
    lookup: PropertyLookupPort | None = None,
    http_client: httpx.Client | None = None,
) -> ConquesoClient:
    """Build instance metadata and property definitions, then register with the server.

    Base URLs with a scheme other than `http`/`https` run in offline mode:
    the client is returned without transmitting anything.

    Args:
        conqueso_url: Explicit server URL.
        instance_metadata: Fixed metadata mapping or metadata source.
        skip_instance_metadata: Report an empty metadata mapping.
        property_definition_source: Definition source replacing the default chain.
        configuration_types: Classes or modules to introspect.
        scan_packages: Package roots to scan for manifest types.
        manifest: Manifest used for the package scan.
        collection_delimiter: Delimiter for collection defaults; settings value otherwise.
        settings: Validated settings; loaded from the environment otherwise.
        lookup: Property lookup; built from the environment and settings otherwise.
        http_client: Optional HTTP client for the Conqueso server.

    Returns:
        ConquesoClient: Client bound to the resolved server URL.

    Raises:
        ConfigurationError: Raised when configuration or definition inputs are invalid.
        CommunicationError: Raised when registration cannot be transmitted.
    """

    if skip_instance_metadata and instance_metadata is not None:
        raise ConfigurationError("Instance data already configured")
    if property_definition_source is not None and (configuration_types is not None or scan_packages is not None):
        raise ConfigurationError("Property definitions source already configured")

    resolved_settings = settings or config_load_settings()
    resolved_lookup = lookup or config_build_property_lookup(resolved_settings)
    resolved_url = bootstrap_resolve_conqueso_url(conqueso_url, resolved_lookup)

    if skip_instance_metadata:
        metadata_source: InstanceMetadataSourcePort = StaticInstanceMetadataSource({})
    elif instance_metadata is None:
        metadata_source = bootstrap_create_default_instance_metadata_source(resolved_settings, resolved_lookup)
    elif isinstance(instance_metadata, Mapping):
        metadata_source = StaticInstanceMetadataSource(instance_metadata)
    else:
        metadata_source = instance_metadata
    collected_metadata = metadata_source.metadata_collect()

    definition_source = property_definition_source or bootstrap_create_default_property_definition_source(
        resolved_lookup,
        configuration_types=configuration_types,
        scan_packages=scan_packages,
        manifest=manifest,
        collection_delimiter=collection_delimiter or resolved_settings.collection_delimiter,
        request_timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    property_definitions = properties_compose([definition_source])
    logger.info("%d property definitions detected", len(property_definitions))

    client = ConquesoClient(
        resolved_url,
        http_client=http_client,
        request_timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    if client.client_is_online():
        logger.info("Initializing connection with Conqueso server: %s", resolved_url)
        try:
            client.client_register(collected_metadata, property_definitions.values())
        except CommunicationError:
            client.client_close()
            raise
    else:
        logger.warning("Skipping posting of instance info to %s", resolved_url)
    return client
