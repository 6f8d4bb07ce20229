"""Connector layer shared by the CRM and OAuth clients.

Key components:
- HubCRMError hierarchy: typed exceptions for every failure mode
- AuthStrategy: NoAuth, BearerTokenAuth
- RequestPolicy: timeouts and default headers
- HTTPClient: httpx wrapper issuing one request per call
"""

from .base import (
    MAX_ERROR_BODY_BYTES,
    AuthStrategy,
    AuthType,
    BearerTokenAuth,
    ConfigurationError,
    DecodeError,
    HubCRMError,
    InvalidArgumentError,
    NoAuth,
    NotAuthenticatedError,
    RemoteError,
    RequestPolicy,
    TimeoutError,
    TransportError,
    truncate,
)
from .http_client import HTTPClient, HTTPResponse

__all__ = [
    # Auth
    "AuthType",
    "AuthStrategy",
    "NoAuth",
    "BearerTokenAuth",
    # Policy
    "RequestPolicy",
    # Errors
    "HubCRMError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "InvalidArgumentError",
    "TransportError",
    "TimeoutError",
    "RemoteError",
    "DecodeError",
    "MAX_ERROR_BODY_BYTES",
    "truncate",
    # HTTP client
    "HTTPClient",
    "HTTPResponse",
]
