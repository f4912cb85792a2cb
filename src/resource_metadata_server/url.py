"""
Public URL Resolution

When running behind a reverse proxy (nginx, Vercel, Cloudflare, ...) the URL a
request arrives on usually reflects the internal address, e.g.
``http://localhost:3000``. The helpers here rebuild the URL the client actually
used from the standard forwarding headers.

Header precedence:
1. X-Forwarded-Host + X-Forwarded-Proto (most common)
2. Forwarded (RFC 7239)
3. The origin of the request URL itself

Upstream proxies are trusted for scheme and host only. Path, query and fragment
always come from the request.
"""

import logging
from dataclasses import dataclass

from starlette.datastructures import URL
from starlette.requests import Request

logger = logging.getLogger(__name__)

DEFAULT_FORWARDED_PROTO = "https"

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}


@dataclass
class ForwardingHint:
    """Host and scheme reported by an upstream proxy."""

    host: str | None = None
    proto: str | None = None


def _first_token(value: str | None) -> str | None:
    """Return the leftmost comma-separated token, trimmed, or None if empty."""
    if value is None:
        return None
    token = value.split(",")[0].strip()
    return token or None


def _unquote(value: str) -> str:
    """Strip one layer of surrounding double quotes."""
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_x_forwarded_headers(host: str | None, proto: str | None) -> ForwardingHint:
    """
    Parse X-Forwarded-Host / X-Forwarded-Proto.

    Both headers may carry a comma-separated list appended by each proxy hop;
    the leftmost value is the one the client sent.
    """
    return ForwardingHint(host=_first_token(host), proto=_first_token(proto))


def parse_forwarded_header(forwarded: str) -> ForwardingHint:
    """
    Parse the RFC 7239 Forwarded header.

    Example: ``for=192.0.2.60;proto=https;host=example.com``

    Only the first forwarded element is used. Malformed pairs are skipped.
    """
    hint = ForwardingHint()

    first_element = forwarded.split(",")[0]

    for pair in first_element.split(";"):
        if "=" not in pair:
            continue

        key, value = pair.split("=", 1)
        key = key.strip().lower()
        value = _unquote(value.strip())

        if not key or not value:
            continue

        if key == "host":
            hint.host = value
        elif key == "proto":
            hint.proto = value

    return hint


def get_request_origin(url: URL) -> str:
    """
    Return the origin (scheme://host[:port]) of a URL.

    Hosts are lower-cased, default ports and userinfo are dropped.
    """
    scheme = url.scheme.lower()
    hostname = url.hostname

    if not hostname:
        return f"{scheme}://{url.netloc}"

    host = hostname.lower()
    if ":" in host:
        # IPv6 literal
        host = f"[{host}]"

    port = url.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    return f"{scheme}://{host}"


def get_forwarded_origin(proto: str, host: str) -> str:
    """
    Return the origin for a proxy-reported scheme and host.

    Normalized like the request origin. A host with an unparseable port is
    used as given.
    """
    origin = f"{proto}://{host}"
    try:
        return get_request_origin(URL(origin))
    except ValueError:
        return origin


def get_public_origin(request: Request) -> str:
    """
    Get the public-facing origin of a request, respecting proxy headers.

    A forwarded host without a forwarded proto is served as https; the
    request's own scheme is never used for it.

    Args:
        request: The incoming request

    Returns:
        The public-facing origin, e.g. "https://example.org"
    """
    forwarded_host = request.headers.get("x-forwarded-host")

    if forwarded_host:
        hint = parse_x_forwarded_headers(
            forwarded_host, request.headers.get("x-forwarded-proto")
        )
        if hint.host:
            origin = get_forwarded_origin(hint.proto or DEFAULT_FORWARDED_PROTO, hint.host)
            logger.debug(f"Public origin from X-Forwarded-Host: {origin}")
            return origin

    forwarded = request.headers.get("forwarded")

    if forwarded:
        hint = parse_forwarded_header(forwarded)
        if hint.host:
            origin = get_forwarded_origin(hint.proto or DEFAULT_FORWARDED_PROTO, hint.host)
            logger.debug(f"Public origin from Forwarded: {origin}")
            return origin

    origin = get_request_origin(request.url)
    logger.debug(f"Public origin from request URL: {origin}")
    return origin


def get_request_path(request: Request) -> str:
    """
    Return the request path exactly as the client encoded it.

    ``request.url.path`` is percent-decoded, so "%2F" would turn into a path
    separator and "%3F" into the start of a query.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return request.url.path
    # Some servers include the query string in raw_path
    path = raw_path.decode("latin-1").split("?", 1)[0]
    return request.scope.get("root_path", "") + path


def get_public_url(request: Request) -> URL:
    """
    Get the public-facing URL of a request, respecting proxy headers.

    Path and query are taken from the raw request target. HTTP requests
    carry no fragment.

    Args:
        request: The incoming request

    Returns:
        The request URL with its origin replaced by the public origin
    """
    public_url = get_public_origin(request) + get_request_path(request)

    query_string = request.scope.get("query_string")
    query = query_string.decode("latin-1") if query_string is not None else request.url.query
    if query:
        public_url += f"?{query}"

    return URL(public_url)
