"""
Resource Metadata Server Errors

Request handling never fails on bad proxy headers; these errors only cover
settings that make the service unusable at startup.
"""

from typing import Any


class ResourceMetadataError(Exception):
    """Base exception for the resource metadata server."""

    error_code: str = "RESOURCE_METADATA_ERROR"

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.details = kwargs


class ConfigurationError(ResourceMetadataError):
    """Settings cannot produce a valid metadata document."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, setting: str | None = None):
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message, **details)
        self.setting = setting
