"""
Protected Resource Metadata Handlers

Request handlers for the RFC 9728 metadata endpoint and its CORS preflight.
"""

import logging
from typing import Any, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..url import get_public_url
from .metadata import generate_protected_resource_metadata, map_to_resource_identifier

logger = logging.getLogger(__name__)

# Open to any origin so web-based OAuth clients can discover the metadata
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Max-Age": "86400",
}

METADATA_CACHE_CONTROL = "max-age=3600"


def protected_resource_handler(
    auth_server_urls: list[str],
    resource_url: str | None = None,
    additional_metadata: dict[str, Any] | None = None,
) -> Callable[[Request], Response]:
    """
    Create the OAuth 2.0 Protected Resource Metadata endpoint (RFC 9728).

    Args:
        auth_server_urls: Issuer identifiers of the authorization servers.
            These should match the "issuer" field in each server's OAuth
            metadata (RFC 8414).
        resource_url: Optional explicit resource identifier. When set it is
            used as-is and the request is ignored. Use this behind proxies
            that don't send standard forwarding headers.
        additional_metadata: Extra metadata fields merged into every response

    Returns:
        Request handler producing the JSON metadata response
    """

    def handler(request: Request) -> Response:
        if resource_url:
            resource = resource_url
        else:
            resource = map_to_resource_identifier(get_public_url(request))

        logger.debug(f"Serving protected resource metadata for {resource}")

        metadata = generate_protected_resource_metadata(
            auth_server_urls=auth_server_urls,
            resource_url=resource,
            additional_metadata=additional_metadata,
        )

        return JSONResponse(
            content=metadata,
            headers={
                **CORS_HEADERS,
                "Cache-Control": METADATA_CACHE_CONTROL,
            },
        )

    return handler


def metadata_cors_options_handler() -> Callable[[Request], Response]:
    """
    CORS preflight handler for OAuth metadata endpoints.

    Needed by OAuth clients running in web browsers.
    """

    def handler(request: Request) -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    return handler
