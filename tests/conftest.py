"""
Pytest Fixtures for Resource Metadata Server Tests

Provides request builders, settings and test clients.
"""

import os
from typing import Callable
from urllib.parse import unquote, urlsplit

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

# Configuration from environment
TEST_CONFIG = {
    "auth_server_url": os.getenv("TEST_AUTH_SERVER_URL", "https://auth-server.com"),
    "resource_server_url": os.getenv("TEST_RESOURCE_SERVER_URL", "https://resource-server.com"),
}

DEFAULT_PORTS = {"http": 80, "https": 443}


@pytest.fixture
def test_config() -> dict:
    """Return test configuration."""
    return TEST_CONFIG


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """
    Build a Starlette request as a server would receive it for a URL.

    The URL's netloc is sent as the Host header; extra headers are added as given.
    """

    def _make_request(url: str, headers: dict[str, str] | None = None, method: str = "GET") -> Request:
        parsed = urlsplit(url)
        raw_headers = [(b"host", parsed.netloc.encode("latin-1"))]
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        raw_path = parsed.path or "/"
        scope = {
            "type": "http",
            "method": method,
            "scheme": parsed.scheme,
            "path": unquote(raw_path),
            "raw_path": raw_path.encode("latin-1"),
            "query_string": parsed.query.encode("latin-1"),
            "headers": raw_headers,
            "server": (parsed.hostname, parsed.port or DEFAULT_PORTS[parsed.scheme]),
        }
        return Request(scope)

    return _make_request


@pytest.fixture
def clean_env(monkeypatch):
    """Remove settings-related environment variables."""
    for name in list(os.environ):
        if name.upper().startswith(("OAUTH_", "HTTP_", "LOG_LEVEL", "DEBUG")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(clean_env):
    """Settings with a single authorization server."""
    from resource_metadata_server.config import Settings

    return Settings(oauth_authorization_servers=TEST_CONFIG["auth_server_url"])


@pytest.fixture
def client(settings) -> TestClient:
    """Test client for the HTTP server, addressed at the resource server URL."""
    from resource_metadata_server.http_server import create_app

    return TestClient(create_app(settings), base_url=TEST_CONFIG["resource_server_url"])
