"""OAuth token lifecycle: code exchange, refresh, introspection, revocation."""

from hubcrm.oauth.manager import OAuthManager
from hubcrm.oauth.models import (
    EXPIRY_SAFETY_MARGIN,
    RefreshTokenInfo,
    TokenSet,
    compute_expiry,
)

__all__ = [
    "OAuthManager",
    "TokenSet",
    "RefreshTokenInfo",
    "compute_expiry",
    "EXPIRY_SAFETY_MARGIN",
]
