"""OAuth 2.0 Protected Resource Metadata (RFC 9728)."""

from .handlers import CORS_HEADERS, metadata_cors_options_handler, protected_resource_handler
from .metadata import (
    ProtectedResourceMetadata,
    generate_protected_resource_metadata,
    map_to_resource_identifier,
)

__all__ = [
    "CORS_HEADERS",
    "ProtectedResourceMetadata",
    "generate_protected_resource_metadata",
    "map_to_resource_identifier",
    "metadata_cors_options_handler",
    "protected_resource_handler",
]
