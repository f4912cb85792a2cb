"""OAuth 2.0 Protected Resource Metadata server for services behind reverse proxies."""

__version__ = "0.1.0"
