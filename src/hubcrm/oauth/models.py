"""OAuth token models."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Tokens are treated as expired this long before the server says so
EXPIRY_SAFETY_MARGIN = timedelta(seconds=60)


def compute_expiry(expires_in: int, now: datetime) -> datetime:
    """Safe expiry instant: now + expires_in seconds - 60s."""
    return now + timedelta(seconds=expires_in) - EXPIRY_SAFETY_MARGIN


class TokenSet(BaseModel):
    """Access/refresh token pair with its safe expiry.

    Never mutated: a refresh yields a new TokenSet.
    """

    access_token: str = Field(..., repr=False)
    refresh_token: str = Field(..., repr=False)
    expires_at: datetime

    model_config = ConfigDict(frozen=True)

    @field_serializer("expires_at")
    def serialize_datetime(self, v: datetime) -> str:
        """Serialize datetime to ISO format."""
        return v.isoformat()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the access token should be refreshed."""
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


class RefreshTokenInfo(BaseModel):
    """Introspection result for a refresh token."""

    user_email: str = Field(..., alias="user")
    internal_user_id: int = Field(..., alias="user_id")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")
