"""Error types for the proxy endpoints.

Every error serializes to the JSON body the endpoints return:
``{"error": "<message>", ...}`` plus whatever diagnostic fields apply.
"""
from typing import Any, Optional


class ProxyError(Exception):
    """Base error carrying the HTTP status the boundary should answer with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ConfigurationError(ProxyError):
    """Required configuration (an API credential) is missing."""

    status_code = 500


class UpstreamError(ProxyError):
    """The upstream API answered with a non-success status."""

    status_code = 502

    def __init__(self, message: str, upstream_status: int, details: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "status": self.upstream_status, "details": self.details}


class InputError(ProxyError):
    """Wrong method or unacceptable input."""

    status_code = 400


class TransientClientError(ProxyError):
    """The UI could not reach a proxy endpoint. Always recovered locally."""

    status_code = 503
