"""EC2-style cloud instance metadata source."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Iterable

import httpx

from .interfaces import InstanceMetadataSourcePort

logger = logging.getLogger(__name__)

EC2_METADATA_SERVICE_URL: Final[str] = "http://169.254.169.254"
EC2_METADATA_ROOT: Final[str] = "/latest/meta-data"


@dataclass(frozen=True)
class MetadataLookup:
    """One metadata service path and the key its value is reported under.

    Attributes:
        key: Metadata key reported to the Conqueso server.
        resource_path: Path on the metadata service, relative to its root URL.
    """

    key: str
    resource_path: str


DEFAULT_METADATA_LOOKUPS: Final[tuple[MetadataLookup, ...]] = (
    MetadataLookup("ami-id", f"{EC2_METADATA_ROOT}/ami-id"),
    MetadataLookup("instance-id", f"{EC2_METADATA_ROOT}/instance-id"),
    MetadataLookup("instance-type", f"{EC2_METADATA_ROOT}/instance-type"),
    MetadataLookup("local-hostname", f"{EC2_METADATA_ROOT}/local-hostname"),
    MetadataLookup("local-ipv4", f"{EC2_METADATA_ROOT}/local-ipv4"),
    MetadataLookup("public-hostname", f"{EC2_METADATA_ROOT}/public-hostname"),
    MetadataLookup("public-ipv4", f"{EC2_METADATA_ROOT}/public-ipv4"),
    MetadataLookup("availability-zone", f"{EC2_METADATA_ROOT}/placement/availability-zone"),
    MetadataLookup("security-groups", f"{EC2_METADATA_ROOT}/security-groups"),
)


class _MetadataNotFound(Exception):
    """Metadata service has no value for the requested path."""


class CloudInstanceMetadataSource(InstanceMetadataSourcePort):
    """Collect instance metadata from a link-local cloud metadata service.

    When the service root cannot be reached the source reports no metadata
    instead of failing, so the same configuration works off-cloud.
    """

    def __init__(
        self,
        additional_lookups: Iterable[MetadataLookup] = (),
        service_url: str = EC2_METADATA_SERVICE_URL,
        timeout_seconds: float = 2.0,
        http_client: httpx.Client | None = None,
    ):
        """Initialize cloud metadata source.

        Args:
            additional_lookups: Lookups queried after the default set.
            service_url: Metadata service base URL.
            timeout_seconds: Connect and read timeout per request.
            http_client: Optional HTTP client; a short-lived one is created per collection otherwise.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when service URL is blank or timeout is not positive.
        """

        normalized_service_url = service_url.strip().rstrip("/")
        if not normalized_service_url:
            raise ValueError("service_url must not be blank")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._metadata_lookups = tuple(dict.fromkeys((*DEFAULT_METADATA_LOOKUPS, *additional_lookups)))
        self._service_url = normalized_service_url
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    @property
    def metadata_lookups(self) -> tuple[MetadataLookup, ...]:
        return self._metadata_lookups

    def metadata_collect(self) -> dict[str, str]:
        """Probe the metadata service and read every configured path.

        Returns:
            dict[str, str]: Metadata keyed by lookup key, empty when unreachable.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._http_client is not None:
            return self._metadata_collect_with_client(self._http_client)
        with httpx.Client(timeout=self._timeout_seconds) as http_client:
            return self._metadata_collect_with_client(http_client)

    def _metadata_collect_with_client(self, http_client: httpx.Client) -> dict[str, str]:
        if not self._metadata_service_reachable(http_client):
            return {}

        metadata: dict[str, str] = {}
        for metadata_lookup in self._metadata_lookups:
            try:
                value = self._metadata_read_resource(http_client, metadata_lookup.resource_path)
            except _MetadataNotFound:
                logger.warning("The requested metadata is not found at %s", metadata_lookup.resource_path)
                continue
            except httpx.HTTPError as error:
                logger.warning("Failed to read cloud metadata from path %s: %s", metadata_lookup.resource_path, error)
                continue
            if value:
                metadata[metadata_lookup.key] = value
        return metadata

    def _metadata_service_reachable(self, http_client: httpx.Client) -> bool:
        try:
            return bool(self._metadata_read_resource(http_client, "/"))
        except (_MetadataNotFound, httpx.HTTPError) as error:
            logger.debug("Cloud metadata service %s is not reachable: %s", self._service_url, error)
            return False

    def _metadata_read_resource(self, http_client: httpx.Client, resource_path: str) -> str:
        normalized_path = resource_path if resource_path.startswith("/") else f"/{resource_path}"
        response = http_client.get(f"{self._service_url}{normalized_path}", timeout=self._timeout_seconds)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise _MetadataNotFound(resource_path)
        response.raise_for_status()
        return response.text.strip()
