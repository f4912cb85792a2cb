"""
RFC 9728 OAuth Protected Resource Metadata

Maps well-known metadata URLs to protected resource identifiers and builds the
metadata document served for them.

https://datatracker.ietf.org/doc/html/rfc9728
"""

import re
from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import URL

# "/.well-known/" followed by exactly one path segment. Any well-known name is
# accepted, not only the default suffix.
WELL_KNOWN_PREFIX_PATTERN = re.compile(r"^/\.well-known/[^/]+")


def map_to_resource_identifier(public_url: URL) -> str:
    """
    Derive the protected resource identifier from a metadata URL.

    Metadata for ``https://host/foo`` lives at
    ``https://host/.well-known/<suffix>/foo``, so the well-known prefix is
    stripped and the rest of the path kept.

    Args:
        public_url: Public URL the metadata was requested on

    Returns:
        Resource identifier; the bare origin (no trailing slash) when no
        sub-path remains
    """
    path = WELL_KNOWN_PREFIX_PATTERN.sub("", public_url.path, count=1)

    # An empty path would otherwise be rendered as "/"
    if path == "/":
        path = ""

    resource = f"{public_url.scheme}://{public_url.netloc}{path}"

    if public_url.query:
        resource += f"?{public_url.query}"

    return resource


@dataclass
class ProtectedResourceMetadata:
    """
    RFC 9728 Protected Resource Metadata.

    Describes the OAuth-protected resource and the authorization servers
    that issue tokens for it.
    """

    # Required: The resource identifier
    resource: str

    # Issuer identifiers of the authorization servers that can issue tokens
    authorization_servers: list[str]

    # Any other RFC 9728 fields (scopes_supported, resource_name, ...)
    additional_metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize metadata to dictionary; additional fields win on collision."""
        result = {
            "resource": self.resource,
            "authorization_servers": self.authorization_servers,
        }
        result.update(self.additional_metadata)
        return result


def generate_protected_resource_metadata(
    auth_server_urls: list[str],
    resource_url: str,
    additional_metadata: dict[str, Any] | None = None,
) -> dict:
    """
    Generate protected resource metadata.

    The resource identifier should be an https URL without a fragment, and
    each authorization server URL should match the "issuer" in that server's
    RFC 8414 metadata. Neither is validated here.

    Args:
        auth_server_urls: Issuer identifiers of the authorization servers
        resource_url: The protected resource identifier
        additional_metadata: Additional metadata fields to include

    Returns:
        Protected resource metadata, serializable to JSON
    """
    metadata = ProtectedResourceMetadata(
        resource=resource_url,
        authorization_servers=auth_server_urls,
        additional_metadata=dict(additional_metadata or {}),
    )
    return metadata.to_dict()
