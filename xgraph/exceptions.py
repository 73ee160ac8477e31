"""Custom exception hierarchy for xgraph."""


class XGraphError(Exception):
    """Base exception for all xgraph errors."""


class TransportError(XGraphError):
    """Request never produced an HTTP response (connection, timeout, proxy)."""


class ApiError(XGraphError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "", url: str | None = None):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        message = f"Request failed with status: {status_code}"
        if reason:
            message += f" {reason}"
        super().__init__(message)


class DecodeError(XGraphError):
    """Response body is not JSON or does not fit the expected shape."""


class ProfileNotFoundError(XGraphError):
    """Handle does not resolve to an account (unknown, suspended or unavailable)."""


class ConfigError(XGraphError):
    """Invalid configuration."""
