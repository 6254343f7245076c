"""Regression tests for the cloud instance metadata source."""

from __future__ import annotations

import logging

import httpx
import pytest

from conqueso_client.metadata import DEFAULT_METADATA_LOOKUPS, CloudInstanceMetadataSource, MetadataLookup

_SERVICE_URL = "http://metadata.test"
_METADATA_VALUES = {
    "/": "latest\n",
    "/latest/meta-data/ami-id": "ami-133cb31d",
    "/latest/meta-data/instance-id": "i-4a3b2c1d",
    "/latest/meta-data/instance-type": "m1.small",
    "/latest/meta-data/local-hostname": "ip-10-1-100-78.ec2.internal",
    "/latest/meta-data/local-ipv4": "10.1.100.78",
    "/latest/meta-data/public-hostname": "ec2-54-1-2-3.compute-1.amazonaws.com",
    "/latest/meta-data/public-ipv4": "54.1.2.3",
    "/latest/meta-data/placement/availability-zone": "us-east-1a",
    "/latest/meta-data/security-groups": "default",
}


def _build_http_client(values: dict[str, str], requested_paths: list[str] | None = None) -> httpx.Client:
    """Build HTTP client serving fixed metadata paths.

    Args:
        values: Response body per request path; missing paths return 404.
        requested_paths: Optional list collecting requested paths.

    Returns:
        httpx.Client: Client backed by an in-memory transport.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        if requested_paths is not None:
            requested_paths.append(request.url.path)
        if request.url.path not in values:
            return httpx.Response(404)
        return httpx.Response(200, text=values[request.url.path])

    return httpx.Client(transport=httpx.MockTransport(_handler))


def test_metadata_cloud_collects_all_default_lookups() -> None:
    """Report one entry per default lookup when the service answers.

    Returns:
        None: Assertions validate collected metadata.

    Raises:
        AssertionError: Raised when metadata is incomplete.
    """

    source = CloudInstanceMetadataSource(service_url=_SERVICE_URL, http_client=_build_http_client(_METADATA_VALUES))

    metadata = source.metadata_collect()

    assert set(metadata) == {metadata_lookup.key for metadata_lookup in DEFAULT_METADATA_LOOKUPS}
    assert metadata["ami-id"] == "ami-133cb31d"
    assert metadata["availability-zone"] == "us-east-1a"


def test_metadata_cloud_skips_missing_and_empty_values(caplog: pytest.LogCaptureFixture) -> None:
    """Skip lookups answered with 404 or an empty body.

    Args:
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate skipped entries.

    Raises:
        AssertionError: Raised when missing values are reported.
    """

    values = dict(_METADATA_VALUES)
    del values["/latest/meta-data/public-ipv4"]
    values["/latest/meta-data/public-hostname"] = "   "
    source = CloudInstanceMetadataSource(service_url=_SERVICE_URL, http_client=_build_http_client(values))

    with caplog.at_level(logging.WARNING, logger="conqueso_client.metadata.cloud"):
        metadata = source.metadata_collect()

    assert "public-ipv4" not in metadata
    assert "public-hostname" not in metadata
    assert metadata["instance-id"] == "i-4a3b2c1d"
    assert "/latest/meta-data/public-ipv4" in caplog.text


def test_metadata_cloud_returns_empty_mapping_when_unreachable() -> None:
    """Probe once and report nothing when the service cannot be reached.

    Returns:
        None: Assertions validate off-cloud behavior.

    Raises:
        AssertionError: Raised when lookups run against an unreachable service.
    """

    requested_paths: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requested_paths.append(request.url.path)
        raise httpx.ConnectError("connection refused", request=request)

    source = CloudInstanceMetadataSource(
        service_url=_SERVICE_URL,
        http_client=httpx.Client(transport=httpx.MockTransport(_handler)),
    )

    assert source.metadata_collect() == {}
    assert requested_paths == ["/"]


def test_metadata_cloud_returns_empty_mapping_for_empty_root() -> None:
    requested_paths: list[str] = []
    source = CloudInstanceMetadataSource(
        service_url=_SERVICE_URL,
        http_client=_build_http_client({"/": ""}, requested_paths),
    )

    assert source.metadata_collect() == {}
    assert requested_paths == ["/"]


def test_metadata_cloud_queries_additional_lookups() -> None:
    """Query custom lookups after the default set.

    Returns:
        None: Assertions validate custom lookup handling.

    Raises:
        AssertionError: Raised when custom lookups are ignored.
    """

    values = dict(_METADATA_VALUES)
    values["/latest/meta-data/mac"] = "0e:49:61:0f:c3:11"
    requested_paths: list[str] = []
    source = CloudInstanceMetadataSource(
        additional_lookups=[MetadataLookup("mac", "latest/meta-data/mac")],
        service_url=f"{_SERVICE_URL}/",
        http_client=_build_http_client(values, requested_paths),
    )

    metadata = source.metadata_collect()

    assert metadata["mac"] == "0e:49:61:0f:c3:11"
    assert len(source.metadata_lookups) == len(DEFAULT_METADATA_LOOKUPS) + 1
    assert requested_paths[-1] == "/latest/meta-data/mac"


def test_metadata_cloud_rejects_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        CloudInstanceMetadataSource(service_url="  ")
    with pytest.raises(ValueError):
        CloudInstanceMetadataSource(timeout_seconds=0)
