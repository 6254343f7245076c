"""Conqueso server client for instance registration and registry queries."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Final, Iterable, Mapping, TypeVar
from urllib.parse import quote, urlencode, urljoin, urlparse

import httpx

from conqueso_client.domain import (
    InstanceInfo,
    PropertyDefinition,
    RoleInfo,
    domain_parse_properties_text,
    instance_from_payload,
    role_from_payload,
)
from conqueso_client.errors import CommunicationError, ValidationError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

HTTP_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})


class ConquesoClient:
    """Synchronous client for one Conqueso server base URL.

    Every operation performs one request/response cycle; nothing is cached
    between calls.
    """

    _USER_AGENT: Final[str] = "conqueso-client/1.0 (Python/httpx)"
    _ROLES_PATH: Final[str] = "/api/roles"
    _INSTANCES_PATH: Final[str] = "/api/instances"
    _ROLE_INSTANCES_PATH_TEMPLATE: Final[str] = "/api/roles/{role}/instances"
    _PROPERTY_PATH_TEMPLATE: Final[str] = "properties/{key}"

    def __init__(
        self,
        conqueso_url: str,
        http_client: httpx.Client | None = None,
        request_timeout_seconds: float = 10.0,
    ):
        """Initialize Conqueso client.

        Args:
            conqueso_url: Conqueso server base URL.
            http_client: Optional HTTP client; one is created and owned otherwise.
            request_timeout_seconds: HTTP request timeout in seconds.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValidationError: Raised when URL is blank or timeout is not positive.
        """

        normalized_url = conqueso_url.strip()
        if not normalized_url:
            raise ValidationError("conqueso_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValidationError("request_timeout_seconds must be > 0")

        self._conqueso_url = normalized_url
        self._request_timeout_seconds = request_timeout_seconds
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=request_timeout_seconds,
            headers={"User-Agent": self._USER_AGENT},
        )

    @property
    def conqueso_url(self) -> str:
        return self._conqueso_url

    def client_is_online(self) -> bool:
        """Return whether the base URL uses a scheme the server can be reached with.

        Returns:
            bool: True for `http` and `https` base URLs.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return urlparse(self._conqueso_url).scheme.lower() in HTTP_SCHEMES

    def client_close(self) -> None:
        """Close the HTTP client when it is owned by this instance."""

        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> ConquesoClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.client_close()

    def client_build_registration_payload(
        self,
        instance_metadata: Mapping[str, str],
        property_definitions: Iterable[PropertyDefinition],
    ) -> dict[str, Any]:
        """Build the registration JSON document.

        Args:
            instance_metadata: Instance metadata mapping.
            property_definitions: Composed property definitions.

        Returns:
            dict[str, Any]: JSON-ready `{instanceMetadata, properties}` document.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        sorted_definitions = sorted(property_definitions, key=lambda definition: definition.name)
        return {
            "instanceMetadata": {str(key): str(value) for key, value in instance_metadata.items()},
            "properties": [definition.definition_to_payload() for definition in sorted_definitions],
        }

    def client_register(
        self,
        instance_metadata: Mapping[str, str],
        property_definitions: Iterable[PropertyDefinition],
    ) -> None:
        """Post instance metadata and property definitions to the server.

        Args:
            instance_metadata: Instance metadata mapping.
            property_definitions: Composed property definitions.

        Returns:
            None: Response body is consumed and discarded.

        Raises:
            CommunicationError: Raised when the POST cannot be completed.
        """

        payload = json.dumps(self.client_build_registration_payload(instance_metadata, property_definitions))
        logger.debug("Transmitting instance info to Conqueso server: %s", payload)
        try:
            response = self._http_client.post(
                self._conqueso_url,
                content=payload.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self._request_timeout_seconds,
            )
            response.read()
            response.raise_for_status()
        except httpx.HTTPError as error:
            raise CommunicationError(
                f"Failed to send instance info to Conqueso server: {self._conqueso_url}",
                url=self._conqueso_url,
            ) from error

    def client_get_latest_properties(self) -> dict[str, str]:
        """Return the latest property values served at the base URL.

        Returns:
            dict[str, str]: Property names and current values.

        Raises:
            CommunicationError: Raised when the request fails or the body cannot be parsed.
        """

        error_message = f"Failed to retrieve latest properties from Conqueso server: {self._conqueso_url}"
        response_text = self._client_http_get(self._conqueso_url, error_message)
        try:
            return domain_parse_properties_text(response_text)
        except ValueError as error:
            raise CommunicationError(error_message, url=self._conqueso_url) from error

    def client_get_property_value(self, key: str) -> str:
        """Return the current raw value of one property.

        Args:
            key: Property name.

        Returns:
            str: Raw response body.

        Raises:
            ValidationError: Raised when key is empty.
            CommunicationError: Raised when the key is unknown or the request fails.
        """

        if not key:
            raise ValidationError("key must not be empty")
        error_message = f"Failed to retrieve {key} property from Conqueso server: {self._conqueso_url}"
        relative_url = self._PROPERTY_PATH_TEMPLATE.format(key=quote(key, safe=""))
        return self._client_http_get(self._client_resolve(relative_url), error_message)

    def client_get_roles(self) -> tuple[RoleInfo, ...]:
        """Return every role known to the server.

        Returns:
            tuple[RoleInfo, ...]: Role records in server order.

        Raises:
            CommunicationError: Raised when the request or JSON parsing fails.
        """

        error_message = f"Failed to retrieve roles from Conqueso server: {self._conqueso_url}"
        return self._client_get_json_records(self._ROLES_PATH, role_from_payload, error_message)

    def client_get_instances(self) -> tuple[InstanceInfo, ...]:
        """Return every instance known to the server."""

        return self._client_get_instances_impl({})

    def client_get_instances_with_metadata(
        self,
        *metadata_query_pairs: str,
        metadata_query: Mapping[str, str] | None = None,
    ) -> tuple[InstanceInfo, ...]:
        """Return instances whose metadata matches every query pair.

        Args:
            metadata_query_pairs: Alternating metadata keys and values.
            metadata_query: Metadata key/value mapping.

        Returns:
            tuple[InstanceInfo, ...]: Matching instance records.

        Raises:
            ValidationError: Raised when no query is given or pairs are uneven.
            CommunicationError: Raised when the request or JSON parsing fails.
        """

        query = client_build_metadata_query(metadata_query_pairs, metadata_query)
        return self._client_get_instances_impl(query)

    def client_get_role_instances(self, role_name: str) -> tuple[InstanceInfo, ...]:
        """Return every instance registered under one role."""

        return self._client_get_role_instances_impl(role_name, {})

    def client_get_role_instances_with_metadata(
        self,
        role_name: str,
        *metadata_query_pairs: str,
        metadata_query: Mapping[str, str] | None = None,
    ) -> tuple[InstanceInfo, ...]:
        """Return instances of one role whose metadata matches every query pair.

        Args:
            role_name: Role name.
            metadata_query_pairs: Alternating metadata keys and values.
            metadata_query: Metadata key/value mapping.

        Returns:
            tuple[InstanceInfo, ...]: Matching instance records.

        Raises:
            ValidationError: Raised when role or query are missing or pairs are uneven.
            CommunicationError: Raised when the request or JSON parsing fails.
        """

        query = client_build_metadata_query(metadata_query_pairs, metadata_query)
        return self._client_get_role_instances_impl(role_name, query)

    def _client_get_instances_impl(self, metadata_query: Mapping[str, str]) -> tuple[InstanceInfo, ...]:
        error_message = f"Failed to retrieve instances from Conqueso server: {self._conqueso_url}"
        relative_url = f"{self._INSTANCES_PATH}{_client_query_string(metadata_query)}"
        return self._client_get_json_records(relative_url, instance_from_payload, error_message)

    def _client_get_role_instances_impl(
        self,
        role_name: str,
        metadata_query: Mapping[str, str],
    ) -> tuple[InstanceInfo, ...]:
        if not role_name:
            raise ValidationError("role_name must not be empty")
        error_message = f"Failed to retrieve {role_name} instances from Conqueso server: {self._conqueso_url}"
        role_path = self._ROLE_INSTANCES_PATH_TEMPLATE.format(role=quote(role_name, safe=""))
        relative_url = f"{role_path}{_client_query_string(metadata_query)}"
        return self._client_get_json_records(relative_url, instance_from_payload, error_message)

    def _client_get_json_records(
        self,
        relative_url: str,
        record_factory: Callable[[Mapping[str, Any]], RecordT],
        error_message: str,
    ) -> tuple[RecordT, ...]:
        response_text = self._client_http_get(self._client_resolve(relative_url), error_message)
        try:
            payload = json.loads(response_text)
            if not isinstance(payload, list):
                raise ValueError("expected a JSON array")
            return tuple(record_factory(entry) for entry in payload)
        except (ValueError, KeyError, TypeError) as error:
            raise CommunicationError(error_message, url=self._conqueso_url) from error

    def _client_resolve(self, relative_url: str) -> str:
        return urljoin(self._conqueso_url, relative_url)

    def _client_http_get(self, url: str, error_message: str) -> str:
        """Execute one HTTP GET and return the decoded response body.

        Args:
            url: Absolute request URL.
            error_message: Message used when the request fails.

        Returns:
            str: Response body text.

        Raises:
            CommunicationError: Raised for transport failures and non-success HTTP status.
        """

        try:
            response = self._http_client.get(url, timeout=self._request_timeout_seconds)
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as error:
            raise CommunicationError(error_message, url=url) from error


def client_build_metadata_query(
    metadata_query_pairs: Iterable[str] = (),
    metadata_query: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Combine a metadata query mapping and raw key/value pairs.

    Args:
        metadata_query_pairs: Alternating metadata keys and values.
        metadata_query: Metadata key/value mapping.

    Returns:
        dict[str, str]: Non-empty query mapping; pairs override mapping entries.

    Raises:
        ValidationError: Raised when pairs are uneven or the resulting query is empty.
    """

    raw_pairs = list(metadata_query_pairs)
    if len(raw_pairs) % 2 != 0:
        raise ValidationError("Odd number of arguments passed as metadata query pairs")

    query = {str(key): str(value) for key, value in (metadata_query or {}).items()}
    for index in range(0, len(raw_pairs), 2):
        query[str(raw_pairs[index])] = str(raw_pairs[index + 1])
    if not query:
        raise ValidationError("No metadata query arguments specified")
    return query


def _client_query_string(metadata_query: Mapping[str, str]) -> str:
    if not metadata_query:
        return ""
    return f"?{urlencode(list(metadata_query.items()))}"
