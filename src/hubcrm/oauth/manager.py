"""OAuth v1 token lifecycle manager.

Trades authorization codes and refresh tokens for TokenSets, introspects
refresh tokens and revokes them. The manager is stateless: the caller
stores the TokenSet and decides when to refresh it.

OAuth calls authenticate with client id/secret in the form body, never
with a bearer header.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ValidationError

from hubcrm.config import OAuthConfig
from hubcrm.connectors.base import DecodeError, InvalidArgumentError
from hubcrm.connectors.http_client import HTTPClient, HTTPResponse
from hubcrm.oauth.models import RefreshTokenInfo, TokenSet, compute_expiry

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _TokenPayload(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int


class OAuthManager:
    """Client for the OAuth v1 token and refresh-token endpoints."""

    def __init__(
        self,
        config: OAuthConfig,
        http: Optional[HTTPClient] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the manager.

        Args:
            config: Immutable OAuth configuration
            http: HTTP client; defaults to one built from config.policy
            clock: Source of the issue time used for expiry computation
        """
        self.config = config
        self.http = http or HTTPClient(policy=config.policy)
        self.clock = clock

    def get_setup_url(self) -> str:
        """Authorization entry point users are sent to."""
        return self.config.setup_url

    def _decode_tokens(self, response: HTTPResponse, issued_at: datetime) -> TokenSet:
        try:
            payload = _TokenPayload.model_validate(response.json())
        except ValidationError as e:
            raise DecodeError(
                f"malformed token payload: {{endpoint={response.endpoint}, "
                f"resCode={response.status_code}, err={e.error_count()} validation errors}}",
                endpoint=response.endpoint,
            ) from e
        return TokenSet(
            access_token=payload.access_token,
            refresh_token=payload.refresh_token,
            expires_at=compute_expiry(payload.expires_in, issued_at),
        )

    def _request_tokens(self, form: Dict[str, Any], error_prefix: str) -> TokenSet:
        issued_at = self.clock()
        response = self.http.post(
            self.config.token_url,
            data=form,
            expected_status=200,
            error_prefix=error_prefix,
        )
        return self._decode_tokens(response, issued_at)

    def exchange_code(self, code: str) -> TokenSet:
        """Trade a one-time authorization code for a TokenSet."""
        if not code:
            raise InvalidArgumentError("authorization code must not be empty")
        tokens = self._request_tokens(
            {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "redirect_uri": self.config.redirect_url,
                "grant_type": "authorization_code",
                "code": code,
            },
            "failed to retrieve auth from hubspot",
        )
        logger.info("Exchanged authorization code for tokens")
        return tokens

    def refresh_tokens(self, refresh_token: str) -> TokenSet:
        """Trade a refresh token for a new TokenSet."""
        if not refresh_token:
            raise InvalidArgumentError("refresh token must not be empty")
        tokens = self._request_tokens(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
            },
            "hubspot oauth failed to refresh access token",
        )
        logger.debug("Refreshed access token")
        return tokens

    def introspect_refresh_token(self, refresh_token: str) -> RefreshTokenInfo:
        """Look up the user a refresh token belongs to."""
        if not refresh_token:
            raise InvalidArgumentError("refresh token must not be empty")
        response = self.http.get(
            self.config.refresh_token_url(refresh_token),
            expected_status=200,
            error_prefix="hubspot oauth failed to retrieve user from refresh token",
        )
        try:
            return RefreshTokenInfo.model_validate(response.json())
        except ValidationError as e:
            # the body echoes the refresh token back
            raise DecodeError(
                f"malformed refresh token info: {{resCode={response.status_code}, "
                f"err={e.error_count()} validation errors}}",
            ) from e

    def revoke_refresh_token(self, refresh_token: str) -> None:
        """Delete a refresh token. Succeeds only on 204 No Content."""
        if not refresh_token:
            raise InvalidArgumentError("refresh token must not be empty")
        self.http.delete(
            self.config.refresh_token_url(refresh_token),
            expected_status=204,
            error_prefix="hubspot oauth failed to delete refresh token",
        )
        logger.info("Revoked refresh token")
