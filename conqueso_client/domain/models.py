"""Typed domain models shared across Conqueso client layers.

Property definitions are the unit exchanged with the Conqueso server during
registration. Role and instance records are read-only snapshots returned by
registry queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from conqueso_client.errors import ConfigurationError


class PropertyType(str, Enum):
    """Closed set of property types understood by the Conqueso server."""

    BOOLEAN = "BOOLEAN"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    INT = "INT"
    LONG = "LONG"
    STRING = "STRING"
    STRING_LIST = "STRING_LIST"
    STRING_MAP = "STRING_MAP"
    STRING_SET = "STRING_SET"


@dataclass(frozen=True)
class PropertyDefinition:
    """Named, typed configuration parameter with canonical default value.

    Attributes:
        name: Unique property name within one definition set.
        type: Property type member.
        value: Canonical string encoding of the default value.
        description: Optional human-readable description.
    """

    name: str
    type: PropertyType
    value: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("property definition name must not be empty")
        if not isinstance(self.type, PropertyType):
            raise ConfigurationError(f"property definition {self.name} has no valid type")
        object.__setattr__(self, "value", "" if self.value is None else str(self.value))
        object.__setattr__(self, "description", "" if self.description is None else str(self.description))

    def definition_with_value(self, value: str | None) -> PropertyDefinition:
        """Return a copy of this definition with only the value replaced.

        Args:
            value: Replacement canonical value.

        Returns:
            PropertyDefinition: New definition keeping name, type and description.

        Raises:
            ConfigurationError: This helper does not raise for valid instances.
        """

        return PropertyDefinition(name=self.name, type=self.type, value=value, description=self.description)

    def definition_to_payload(self) -> dict[str, str]:
        """Serialize definition into its wire representation.

        Returns:
            dict[str, str]: JSON-ready property definition object.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "name": self.name,
            "type": self.type.value,
            "value": self.value,
            "description": self.description,
        }


def definition_from_payload(payload: object) -> PropertyDefinition:
    """Build one property definition from a decoded JSON object.

    Args:
        payload: Decoded JSON value expected to be an object.

    Returns:
        PropertyDefinition: Parsed definition.

    Raises:
        ConfigurationError: Raised when payload shape, name or type is invalid.
    """

    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"property definition must be a JSON object, got {type(payload).__name__}")

    name = payload.get("name")
    type_name = payload.get("type")
    value = payload.get("value")
    description = payload.get("description")
    if not isinstance(name, str) or not name:
        raise ConfigurationError("property definition is missing a name")
    if not isinstance(type_name, str):
        raise ConfigurationError(f"property definition {name} is missing a type")
    try:
        property_type = PropertyType(type_name.strip().upper())
    except ValueError as error:
        raise ConfigurationError(f"property definition {name} has unknown type {type_name}") from error
    if value is not None and not isinstance(value, (str, int, float, bool)):
        raise ConfigurationError(f"property definition {name} value must be a scalar")
    if description is not None and not isinstance(description, str):
        raise ConfigurationError(f"property definition {name} description must be a string")

    if isinstance(value, bool):
        value = "true" if value else "false"
    return PropertyDefinition(name=name, type=property_type, value=value, description=description)


@dataclass(frozen=True)
class RoleInfo:
    """Role listing entry returned by the Conqueso server.

    Attributes:
        name: Role name.
        created_at: Server creation timestamp text.
        updated_at: Server update timestamp text.
        instance_count: Number of instances registered under the role.
    """

    name: str
    created_at: str | None
    updated_at: str | None
    instance_count: int

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class InstanceInfo:
    """Instance listing entry returned by the Conqueso server.

    Attributes:
        ip_address: Network address of the instance.
        role: Role name the instance registered under.
        poll_interval_millis: Configured polling interval in milliseconds.
        offline: Whether the server considers the instance offline.
        created_at: Server creation timestamp text.
        updated_at: Server update timestamp text.
        metadata: Instance metadata snapshot.
    """

    ip_address: str
    role: str
    poll_interval_millis: int
    offline: bool
    created_at: str | None
    updated_at: str | None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstanceInfo):
            return NotImplemented
        return (
            self.ip_address == other.ip_address
            and self.role == other.role
            and self.poll_interval_millis == other.poll_interval_millis
            and self.offline == other.offline
            and self.created_at == other.created_at
            and self.updated_at == other.updated_at
            and dict(self.metadata) == dict(other.metadata)
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.ip_address,
                self.role,
                self.poll_interval_millis,
                self.offline,
                self.created_at,
                self.updated_at,
                frozenset(self.metadata.items()),
            )
        )

    def __str__(self) -> str:
        return f"{self.role}@{self.ip_address}"


def role_from_payload(payload: Mapping[str, Any]) -> RoleInfo:
    """Build one role record from a decoded server JSON object.

    Args:
        payload: Decoded role object.

    Returns:
        RoleInfo: Parsed role record.

    Raises:
        ValueError: Raised when payload is not an object or fields have wrong types.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("role entry must be a JSON object")
    instance_count = payload.get("instanceCount", payload.get("instances", 0))
    return RoleInfo(
        name=str(payload["name"]),
        created_at=payload.get("createdAt"),
        updated_at=payload.get("updatedAt"),
        instance_count=int(instance_count or 0),
    )


def instance_from_payload(payload: Mapping[str, Any]) -> InstanceInfo:
    """Build one instance record from a decoded server JSON object.

    Args:
        payload: Decoded instance object.

    Returns:
        InstanceInfo: Parsed instance record.

    Raises:
        ValueError: Raised when payload is not an object or fields have wrong types.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("instance entry must be a JSON object")
    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise ValueError("instance metadata must be a JSON object")
    return InstanceInfo(
        ip_address=str(payload["ip"]),
        role=str(payload["role"]),
        poll_interval_millis=int(payload.get("pollInterval") or 0),
        offline=bool(payload.get("offline", False)),
        created_at=payload.get("createdAt"),
        updated_at=payload.get("updatedAt"),
        metadata={str(key): str(value) for key, value in metadata.items()},
    )
