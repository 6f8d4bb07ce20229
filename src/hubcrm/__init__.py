"""hubcrm: typed access to CRM v3 objects and OAuth v1 tokens."""

from hubcrm.config import CRMConfig, OAuthConfig
from hubcrm.connectors.base import (
    ConfigurationError,
    DecodeError,
    HubCRMError,
    InvalidArgumentError,
    NotAuthenticatedError,
    RemoteError,
    TransportError,
)
from hubcrm.crm import AssociationLink, CRMClient, Owner, Resource
from hubcrm.oauth import OAuthManager, RefreshTokenInfo, TokenSet

__version__ = "0.1.0"

__all__ = [
    "CRMConfig",
    "OAuthConfig",
    "CRMClient",
    "OAuthManager",
    "Resource",
    "AssociationLink",
    "Owner",
    "TokenSet",
    "RefreshTokenInfo",
    "HubCRMError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "InvalidArgumentError",
    "TransportError",
    "RemoteError",
    "DecodeError",
]
