"""Configuration management for the Resource Metadata Server."""

from pydantic_settings import BaseSettings

DEFAULT_WELL_KNOWN_SUFFIX = "oauth-protected-resource"


def _split(value: str | None, separator: str | None = None) -> list[str]:
    """Split a delimited setting into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Issuer identifiers of the authorization servers (comma-separated).
    # Each must match the "issuer" in that server's RFC 8414 metadata.
    oauth_authorization_servers: str = ""

    # Static resource identifier; when set, proxy headers and the request URL are ignored
    oauth_resource_url: str | None = None

    # Well-known URI suffix the metadata is served under
    oauth_well_known_suffix: str = DEFAULT_WELL_KNOWN_SUFFIX

    # Optional RFC 9728 metadata (space-separated lists)
    oauth_scopes_supported: str = ""
    oauth_bearer_methods_supported: str = "header"
    oauth_resource_name: str | None = None
    oauth_resource_documentation: str | None = None

    # HTTP Server
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    log_level: str = "info"

    # Development
    debug: bool = False

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
    }

    @property
    def authorization_server_list(self) -> list[str]:
        """Return configured authorization server issuers."""
        return _split(self.oauth_authorization_servers, ",")

    @property
    def scope_list(self) -> list[str]:
        return _split(self.oauth_scopes_supported)

    @property
    def bearer_method_list(self) -> list[str]:
        return _split(self.oauth_bearer_methods_supported)

    @property
    def additional_metadata(self) -> dict:
        """
        Optional metadata fields to merge into the metadata document.

        Only fields that are actually configured are included.
        """
        metadata: dict = {}

        if self.scope_list:
            metadata["scopes_supported"] = self.scope_list

        if self.bearer_method_list:
            metadata["bearer_methods_supported"] = self.bearer_method_list

        if self.oauth_resource_name:
            metadata["resource_name"] = self.oauth_resource_name

        if self.oauth_resource_documentation:
            metadata["resource_documentation"] = self.oauth_resource_documentation

        return metadata
