"""Core connector abstractions shared by the CRM and OAuth clients.

Defines:
- Error hierarchy: typed exceptions raised by every remote operation
- AuthStrategy: how a request is authenticated (bearer token or nothing)
- RequestPolicy: timeouts and default headers

Nothing here is retried. Every failure propagates to the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

# Response bodies are cut to this many bytes in error messages
MAX_ERROR_BODY_BYTES = 512


def truncate(body: bytes, max_bytes: int = MAX_ERROR_BODY_BYTES) -> str:
    """Return a UTF-8 rendering of body limited to max_bytes.

    When truncation happens a suffix records how many bytes were omitted.
    """
    if max_bytes <= 0:
        return ""
    if len(body) <= max_bytes:
        return body.decode("utf-8", errors="replace")
    omitted = len(body) - max_bytes
    head = body[:max_bytes].decode("utf-8", errors="replace")
    return f"{head}...[truncated {omitted} bytes]"


# =============================================================================
# Error Hierarchy
# =============================================================================


class HubCRMError(Exception):
    """Base exception for all hubcrm errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(HubCRMError):
    """Invalid or conflicting configuration (e.g. two auth sources)."""

    pass


class NotAuthenticatedError(ConfigurationError):
    """No bearer token could be resolved for a CRM call."""

    pass


class InvalidArgumentError(HubCRMError, ValueError):
    """A caller-supplied argument is unusable (e.g. empty id list)."""

    pass


class TransportError(HubCRMError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, endpoint: str = ""):
        super().__init__(message, {"endpoint": endpoint})
        self.endpoint = endpoint


class TimeoutError(TransportError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        endpoint: str = "",
        timeout_seconds: Optional[float] = None,
    ):
        super().__init__(message, endpoint)
        self.details["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds


class RemoteError(HubCRMError):
    """The platform answered with something other than the expected status.

    Also raised when a technically successful response is logically
    incomplete (a batch read missing some of the requested objects).
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        endpoint: str = "",
    ):
        super().__init__(
            message,
            {"status_code": status_code, "body": body, "endpoint": endpoint},
        )
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint


class DecodeError(HubCRMError):
    """A response body did not parse into the expected shape."""

    def __init__(self, message: str, endpoint: str = "", body: str = ""):
        super().__init__(message, {"endpoint": endpoint, "body": body})
        self.endpoint = endpoint
        self.body = body


# =============================================================================
# Authentication Strategies
# =============================================================================


class AuthType(str, Enum):
    """Type of authentication strategy."""

    NONE = "none"
    BEARER = "bearer"


@dataclass
class AuthStrategy:
    """Base authentication strategy (data holder)."""

    auth_type: AuthType = AuthType.NONE

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        return {}


@dataclass
class NoAuth(AuthStrategy):
    """No authentication header. OAuth endpoints authenticate in the body."""

    auth_type: AuthType = field(default=AuthType.NONE, init=False)


@dataclass
class BearerTokenAuth(AuthStrategy):
    """Bearer token authentication: Authorization: Bearer <token>."""

    auth_type: AuthType = field(default=AuthType.BEARER, init=False)
    token: str = ""

    def get_headers(self) -> Dict[str, str]:
        """Get authorization header."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return "BearerTokenAuth(token=***)"


# =============================================================================
# Request Policy
# =============================================================================


@dataclass(frozen=True)
class RequestPolicy:
    """Policy for HTTP requests: timeouts and headers.

    There are no retry or rate-limit settings; callers that need
    resilience wrap the client operations themselves.
    """

    connect_timeout: float = 10.0  # seconds
    read_timeout: float = 30.0  # seconds
    total_timeout: float = 60.0  # seconds

    user_agent: str = "hubcrm/0.1"
    default_headers: Dict[str, str] = field(default_factory=dict)
