"""Configuration and environment handling for hubcrm.

Configuration values are immutable and built once, then handed to the
component constructors (CRMClient, OAuthManager). Nothing reads global
mutable state at request time.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from dotenv import load_dotenv

from hubcrm.connectors.base import ConfigurationError, RequestPolicy

DEFAULT_CRM_BASE_URL = "https://api.hubapi.com/crm/v3"
DEFAULT_OAUTH_BASE_URL = "https://api.hubapi.com/oauth/v1"


def load_env(env_path: Optional[Path] = None) -> None:
    """Load a .env file into the environment if it exists.

    Existing environment variables win over values from the file.
    """
    path = env_path or Path.cwd() / ".env"
    if path.exists():
        load_dotenv(path)


def _timeout_from_env() -> float:
    raw = os.getenv("HUBCRM_TIMEOUT_S", "30")
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"HUBCRM_TIMEOUT_S must be a number, got {raw!r}")


@dataclass(frozen=True)
class CRMConfig:
    """CRM client configuration.

    Attributes:
        account_id: Portal/account id, used to namespace association keys
        base_url: CRM v3 API root
        static_token: Optional bearer token shared by every call. When set,
            callers must not pass their own token.
        policy: Request timeouts and headers
    """

    account_id: str = ""
    base_url: str = DEFAULT_CRM_BASE_URL
    static_token: Optional[str] = None
    policy: RequestPolicy = field(default_factory=RequestPolicy)

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("CRM base URL must not be empty")
        # Normalize once so URL joins never produce "//"
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.static_token == "":
            object.__setattr__(self, "static_token", None)

    @property
    def objects_url(self) -> str:
        return f"{self.base_url}/objects"

    @property
    def owners_url(self) -> str:
        return f"{self.base_url}/owners"

    @classmethod
    def from_env(cls) -> "CRMConfig":
        """Build configuration from HUBCRM_* environment variables."""
        return cls(
            account_id=os.getenv("HUBCRM_ACCOUNT_ID", ""),
            base_url=os.getenv("HUBCRM_BASE_URL", DEFAULT_CRM_BASE_URL),
            static_token=os.getenv("HUBCRM_STATIC_TOKEN") or None,
            policy=RequestPolicy(read_timeout=_timeout_from_env()),
        )


@dataclass(frozen=True)
class OAuthConfig:
    """OAuth token manager configuration."""

    client_id: str
    client_secret: str
    redirect_url: str = ""
    setup_url: str = ""
    base_url: str = DEFAULT_OAUTH_BASE_URL
    policy: RequestPolicy = field(default_factory=RequestPolicy)

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("OAuth base URL must not be empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def token_url(self) -> str:
        return f"{self.base_url}/token"

    def refresh_token_url(self, refresh_token: str) -> str:
        return f"{self.base_url}/refresh-tokens/{quote(refresh_token, safe='')}"

    def __repr__(self) -> str:
        return (
            f"OAuthConfig(client_id={self.client_id!r}, client_secret=***, "
            f"redirect_url={self.redirect_url!r}, setup_url={self.setup_url!r}, "
            f"base_url={self.base_url!r})"
        )

    @classmethod
    def from_env(cls) -> "OAuthConfig":
        """Build configuration from HUBCRM_OAUTH_* environment variables.

        Raises:
            ConfigurationError: If the client id or secret is missing
        """
        client_id = os.getenv("HUBCRM_OAUTH_CLIENT_ID", "")
        client_secret = os.getenv("HUBCRM_OAUTH_CLIENT_SECRET", "")
        if not client_id or not client_secret:
            raise ConfigurationError(
                "HUBCRM_OAUTH_CLIENT_ID and HUBCRM_OAUTH_CLIENT_SECRET must both be set"
            )
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            redirect_url=os.getenv("HUBCRM_OAUTH_REDIRECT_URL", ""),
            setup_url=os.getenv("HUBCRM_OAUTH_SETUP_URL", ""),
            base_url=os.getenv("HUBCRM_OAUTH_BASE_URL", DEFAULT_OAUTH_BASE_URL),
            policy=RequestPolicy(read_timeout=_timeout_from_env()),
        )


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_log_level() -> str:
    """Logging level for the CLI (HUBCRM_LOG_LEVEL, default WARNING).

    Raises:
        ConfigurationError: If the value is not a standard level name
    """
    level = os.getenv("HUBCRM_LOG_LEVEL", "WARNING").upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"HUBCRM_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
        )
    return level
