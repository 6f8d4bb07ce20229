"""HTTP client wrapper used by the CRM and OAuth clients.

Wraps httpx with RequestPolicy enforcement:
- Configurable timeouts
- Exactly one attempt per call (no retries, no backoff)
- Error mapping to the HubCRMError hierarchy

Tests inject an httpx transport (usually httpx.MockTransport) so no
request ever leaves the process.
"""

import json as json_module
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .base import (
    AuthStrategy,
    DecodeError,
    RemoteError,
    RequestPolicy,
    TimeoutError,
    TransportError,
    truncate,
)

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """Simplified HTTP response wrapper."""

    status_code: int
    headers: Dict[str, str]
    body: bytes
    endpoint: str = ""
    elapsed_seconds: float = 0.0

    def json(self) -> Any:
        """Parse the body as JSON, raising DecodeError on malformed input."""
        try:
            return json_module.loads(self.body)
        except ValueError as e:
            raise DecodeError(
                f"malformed JSON response body: {{endpoint={self.endpoint}, "
                f"resCode={self.status_code}, resBody={truncate(self.body)}, err={e}}}",
                endpoint=self.endpoint,
                body=truncate(self.body),
            ) from e


class HTTPClient:
    """HTTP client issuing single request/response round trips.

    Holds no per-request state, so one instance can be shared across
    threads.
    """

    def __init__(
        self,
        policy: Optional[RequestPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize HTTP client.

        Args:
            policy: Request policy (timeouts, headers)
            transport: Optional httpx transport, used by tests
        """
        self.policy = policy or RequestPolicy()
        self.transport = transport

    def _build_headers(
        self,
        auth: Optional[AuthStrategy] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        """Build request headers including auth and defaults."""
        headers = {"User-Agent": self.policy.user_agent}
        headers.update(self.policy.default_headers)

        if auth:
            headers.update(auth.get_headers())

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.policy.connect_timeout,
            read=self.policy.read_timeout,
            write=self.policy.read_timeout,
            pool=self.policy.total_timeout,
        )

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[AuthStrategy] = None,
        expected_status: Optional[int] = None,
        error_prefix: str = "request failed",
    ) -> HTTPResponse:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute endpoint URL
            json: JSON body to send
            data: Form data to send
            params: Query parameters
            headers: Additional headers
            auth: Authentication strategy for this request
            expected_status: The one status that counts as success.
                Anything else raises RemoteError. None disables the check.
            error_prefix: Leading text for error messages

        Returns:
            HTTPResponse with status, headers, and body

        Raises:
            RemoteError: On a status other than expected_status
            TimeoutError: On request timeout
            TransportError: On connection or other network failure
        """
        request_headers = self._build_headers(auth, headers)
        start_time = time.monotonic()

        try:
            with httpx.Client(timeout=self._timeout(), transport=self.transport) as client:
                response = client.request(
                    method=method,
                    url=url,
                    json=json,
                    data=data,
                    params=params,
                    headers=request_headers,
                )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out: {e}")
            raise TimeoutError(
                f"{error_prefix}: {{endpoint={url}, err=timed out after "
                f"{self.policy.read_timeout}s}}",
                endpoint=url,
                timeout_seconds=self.policy.read_timeout,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} transport failure: {e}")
            raise TransportError(f"{error_prefix}: {{endpoint={url}, err={e}}}", endpoint=url) from e

        elapsed = time.monotonic() - start_time
        endpoint = str(response.request.url)
        result = HTTPResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            endpoint=endpoint,
            elapsed_seconds=elapsed,
        )
        logger.debug(f"{method} {endpoint} -> {result.status_code} ({elapsed:.3f}s)")

        if expected_status is not None and result.status_code != expected_status:
            body = truncate(result.body)
            logger.warning(f"{method} {endpoint} returned {result.status_code}, expected {expected_status}")
            raise RemoteError(
                f"{error_prefix}: {{endpoint={endpoint}, resCode={result.status_code}, resBody={body}}}",
                status_code=result.status_code,
                body=body,
                endpoint=endpoint,
            )

        return result

    def get(self, url: str, **kwargs) -> HTTPResponse:
        """HTTP GET request."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> HTTPResponse:
        """HTTP POST request."""
        return self.request("POST", url, **kwargs)

    def patch(self, url: str, **kwargs) -> HTTPResponse:
        """HTTP PATCH request."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs) -> HTTPResponse:
        """HTTP DELETE request."""
        return self.request("DELETE", url, **kwargs)
