"""URL-based property definition sources for JSON and properties documents.

Both sources resolve their document URLs either from explicit constructor
arguments or from a comma-separated list stored under a well-known property
name. Documents are applied in URL order, so later documents win.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generic, Iterable, TypeVar
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from conqueso_client.config import (
    JSON_URLS_PROPERTY,
    OVERRIDE_PROPERTIES_URLS_PROPERTY,
    PropertyLookupPort,
    config_build_property_lookup,
)
from conqueso_client.domain import PropertyDefinition, definition_from_payload, domain_parse_properties_text
from conqueso_client.errors import ConfigurationError

from .interfaces import PropertyDefinitionSourcePort

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT")

URL_LIST_SEPARATOR = ","
_HTTP_SCHEMES = frozenset({"http", "https"})


class UrlPropertyDefinitionSource(PropertyDefinitionSourcePort, Generic[DocumentT]):
    """Base source reading zero or more documents from resolved URLs."""

    def __init__(
        self,
        lookup_property_name: str,
        urls: Iterable[str] | str | None = None,
        lookup: PropertyLookupPort | None = None,
        http_client: httpx.Client | None = None,
        request_timeout_seconds: float = 10.0,
    ):
        """Initialize URL-based source.

        Args:
            lookup_property_name: Property holding the comma-separated URL list.
            urls: Explicit document URL or URLs; overrides the lookup property.
            lookup: Property lookup, defaults to the process environment at read time.
            http_client: Optional HTTP client used for `http`/`https` URLs.
            request_timeout_seconds: Timeout for remote document reads.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timeout is not positive.
        """

        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        if isinstance(urls, str):
            urls = [urls]
        self._lookup_property_name = lookup_property_name
        self._urls = tuple(str(url).strip() for url in (urls or ()) if str(url).strip())
        self._lookup = lookup
        self._http_client = http_client
        self._request_timeout_seconds = request_timeout_seconds

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        """Read every resolved document, then merge them in order.

        Args:
            definitions: Mutable mapping from property name to definition.

        Returns:
            None: Mutates the target mapping as side effect.

        Raises:
            ConfigurationError: Raised when a URL cannot be read or a document is malformed.
        """

        documents = [self._source_read_url(url) for url in self.source_resolve_urls()]
        for document in documents:
            self._source_merge(document, definitions)

    def source_resolve_urls(self) -> tuple[str, ...]:
        """Return explicit URLs, or URLs listed in the lookup property.

        Returns:
            tuple[str, ...]: Document URLs in application order, possibly empty.

        Raises:
            RuntimeError: Raised when the lookup backing store is unavailable.
        """

        if self._urls:
            return self._urls

        lookup = self._lookup or config_build_property_lookup()
        property_value = lookup.lookup_get(self._lookup_property_name)
        if not property_value:
            return ()
        return tuple(url.strip() for url in property_value.split(URL_LIST_SEPARATOR) if url.strip())

    def _source_parse_document(self, text: str) -> DocumentT:
        raise NotImplementedError

    def _source_merge(self, document: DocumentT, definitions: dict[str, PropertyDefinition]) -> None:
        raise NotImplementedError

    def _source_read_url(self, url: str) -> DocumentT:
        text = self._source_read_text(url)
        try:
            return self._source_parse_document(text)
        except ConfigurationError as error:
            raise ConfigurationError(f"Failed to read property definitions from url: {url}: {error}", url=url) from error
        except ValueError as error:
            raise ConfigurationError(f"Failed to read property definitions from url: {url}", url=url) from error

    def _source_read_text(self, url: str) -> str:
        parsed_url = urlparse(url)
        scheme = parsed_url.scheme.lower()

        if scheme in _HTTP_SCHEMES:
            try:
                if self._http_client is not None:
                    response = self._http_client.get(url, timeout=self._request_timeout_seconds)
                else:
                    response = httpx.get(url, timeout=self._request_timeout_seconds)
                response.raise_for_status()
                return response.text
            except httpx.HTTPError as error:
                raise ConfigurationError(f"Failed to read properties from url: {url}", url=url) from error

        if scheme == "file":
            file_path = Path(url2pathname(parsed_url.path))
        elif not scheme or len(scheme) == 1:
            # Plain filesystem path, including Windows drive letters.
            file_path = Path(url)
        else:
            raise ConfigurationError(f"Unsupported properties file url: {url}", url=url)

        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise ConfigurationError(f"Failed to read properties from url: {url}", url=url) from error


class JsonFilePropertyDefinitionSource(UrlPropertyDefinitionSource[list[PropertyDefinition]]):
    """Contribute definitions from JSON arrays of `{name, type, value, description}` objects.

    Each entry replaces any existing definition with the same name.
    """

    def __init__(
        self,
        urls: Iterable[str] | str | None = None,
        lookup: PropertyLookupPort | None = None,
        http_client: httpx.Client | None = None,
        request_timeout_seconds: float = 10.0,
    ):
        super().__init__(
            JSON_URLS_PROPERTY,
            urls=urls,
            lookup=lookup,
            http_client=http_client,
            request_timeout_seconds=request_timeout_seconds,
        )

    def _source_parse_document(self, text: str) -> list[PropertyDefinition]:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as error:
            logger.error("Failed to parse property definition list from JSON document")
            raise ConfigurationError("Property definitions document is not valid JSON") from error
        if not isinstance(payload, list):
            raise ConfigurationError("Property definitions document must be a JSON array")
        return [definition_from_payload(entry) for entry in payload]

    def _source_merge(self, document: list[PropertyDefinition], definitions: dict[str, PropertyDefinition]) -> None:
        for definition in document:
            if definition.name in definitions:
                logger.info("Overriding property definition for %s", definition.name)
            definitions[definition.name] = definition


class PropertiesFileOverrideSource(UrlPropertyDefinitionSource[dict[str, str]]):
    """Override values of already-defined properties from `key=value` documents.

    Keys without an existing definition are skipped; this source never adds
    new definitions.
    """

    def __init__(
        self,
        urls: Iterable[str] | str | None = None,
        lookup: PropertyLookupPort | None = None,
        http_client: httpx.Client | None = None,
        request_timeout_seconds: float = 10.0,
    ):
        super().__init__(
            OVERRIDE_PROPERTIES_URLS_PROPERTY,
            urls=urls,
            lookup=lookup,
            http_client=http_client,
            request_timeout_seconds=request_timeout_seconds,
        )

    def _source_parse_document(self, text: str) -> dict[str, str]:
        return domain_parse_properties_text(text)

    def _source_merge(self, document: dict[str, str], definitions: dict[str, PropertyDefinition]) -> None:
        for property_name, property_value in document.items():
            existing_definition = definitions.get(property_name)
            if existing_definition is None:
                logger.warning("Attempting to merge unknown property name, skipping: %s", property_name)
                continue
            definitions[property_name] = existing_definition.definition_with_value(property_value)
