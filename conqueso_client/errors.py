"""Project-native typed exceptions for Conqueso client failures."""

from __future__ import annotations


class ConquesoError(Exception):
    """Base exception for Conqueso client failures.

    Attributes:
        url: Optional URL involved in the failing operation.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class ConfigurationError(ConquesoError, ValueError):
    """Caller misconfiguration or unresolvable definition input."""


class CommunicationError(ConquesoError, ConnectionError):
    """Transport-level failure while talking to the Conqueso server."""


class ValidationError(ConquesoError, ValueError):
    """Structurally invalid arguments supplied to a client operation."""
