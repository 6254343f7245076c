"""Typed interfaces for instance metadata sources."""

from typing import Protocol


class InstanceMetadataSourcePort(Protocol):
    """Port definition for components describing the running instance."""

    def metadata_collect(self) -> dict[str, str]:
        """Collect key/value metadata describing the running instance.

        Returns:
            dict[str, str]: Fresh metadata mapping owned by the caller.

        Raises:
            ConfigurationError: Raised when the source is misconfigured.
        """
