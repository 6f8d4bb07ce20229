"""Test configuration and fixtures."""

import json
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

import httpx
import pytest

from hubcrm.config import CRMConfig, OAuthConfig
from hubcrm.connectors.http_client import HTTPClient

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeServer:
    """Canned-response HTTP backend recording every request it receives."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: List[httpx.Response] = []
        self.error: Optional[Exception] = None

    def reply(self, status_code: int, body: Any = None, raw: Optional[bytes] = None) -> None:
        """Queue a response. Queued responses are served in order."""
        if raw is not None:
            self._responses.append(httpx.Response(status_code, content=raw))
        elif body is None:
            self._responses.append(httpx.Response(status_code))
        else:
            self._responses.append(httpx.Response(status_code, json=body))

    def fail_with(self, error: Exception) -> None:
        """Raise error instead of answering."""
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if not self._responses:
            return httpx.Response(500, json={"message": "no canned response"})
        return self._responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def server() -> FakeServer:
    """Provide a fake HTTP backend."""
    return FakeServer()


@pytest.fixture
def http(server: FakeServer) -> HTTPClient:
    """HTTP client wired to the fake backend."""
    return HTTPClient(transport=httpx.MockTransport(server.handler))


@pytest.fixture
def crm_config() -> CRMConfig:
    return CRMConfig(account_id="42", base_url="https://crm.test/crm/v3")


@pytest.fixture
def oauth_config() -> OAuthConfig:
    return OAuthConfig(
        client_id="client-id",
        client_secret="client-secret",
        redirect_url="https://app.test/callback",
        setup_url="https://app.test/install",
        base_url="https://crm.test/oauth/v1",
    )


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
