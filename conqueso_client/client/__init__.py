"""Client package for Conqueso server registration and queries."""

from .registry_client import HTTP_SCHEMES, ConquesoClient, client_build_metadata_query

__all__ = ["HTTP_SCHEMES", "ConquesoClient", "client_build_metadata_query"]
