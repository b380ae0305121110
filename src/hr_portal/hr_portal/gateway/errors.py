from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """The attendance device API could not deliver usable data."""

    kind = "http_error"

    def __init__(self, message: str, *, status: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.details = details


class GatewayTimeoutError(GatewayError):
    kind = "timeout"


class GatewayConnectionError(GatewayError):
    kind = "unreachable"


class GatewayResponseError(GatewayError):
    """2xx response whose body is not data (leaked exceptions, invalid JSON)."""

    kind = "bad_response"
