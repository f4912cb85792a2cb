"""
HTTP Resource Metadata Server

Serves RFC 9728 Protected Resource Metadata over HTTP.
"""

import logging

from fastapi import FastAPI

from . import __version__
from .config import Settings
from .exceptions import ConfigurationError
from .oauth.handlers import metadata_cors_options_handler, protected_resource_handler

logger = logging.getLogger(__name__)

SERVICE_NAME = "resource-metadata-server"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Metadata is served on "/.well-known/<suffix>" for the root resource and on
    "/.well-known/<suffix>/<path>" for resources with a path.

    Raises:
        ConfigurationError: If no authorization server is configured
    """
    settings = settings or Settings()

    authorization_servers = settings.authorization_server_list
    if not authorization_servers:
        logger.error("No OAuth authorization servers configured")
        raise ConfigurationError(
            "At least one authorization server issuer is required",
            setting="oauth_authorization_servers",
        )

    app = FastAPI(
        title="Resource Metadata Server",
        description="OAuth 2.0 Protected Resource Metadata (RFC 9728)",
        version=__version__,
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": SERVICE_NAME}

    metadata_handler = protected_resource_handler(
        auth_server_urls=authorization_servers,
        resource_url=settings.oauth_resource_url,
        additional_metadata=settings.additional_metadata,
    )
    cors_handler = metadata_cors_options_handler()

    well_known_path = f"/.well-known/{settings.oauth_well_known_suffix}"
    for path in (well_known_path, well_known_path + "/{resource_path:path}"):
        app.add_api_route(
            path,
            metadata_handler,
            methods=["GET"],
            name=f"protected_resource_metadata:{path}",
        )
        app.add_api_route(
            path,
            cors_handler,
            methods=["OPTIONS"],
            name=f"protected_resource_metadata_options:{path}",
            include_in_schema=False,
        )

    logger.info(f"Authorization servers: {', '.join(authorization_servers)}")
    if settings.oauth_resource_url:
        logger.info(f"Resource identifier fixed to {settings.oauth_resource_url}")
    else:
        logger.info(f"Resource identifier derived from requests to {well_known_path}")

    return app


# =============================================================================
# Main Entry Point
# =============================================================================


def main():
    """Run HTTP server."""
    import uvicorn

    settings = Settings()

    uvicorn.run(
        "resource_metadata_server.http_server:create_app",
        factory=True,
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
