"""Shared HTTP plumbing for the Google API clients.

Every request is authenticated with a bearer token from the credential
provider and runs under the retry policy, so a cold start or a 429 on any
single call is absorbed here rather than in the tool handlers.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from workspace_bridge.auth import ApplicationDefaultCredentials
from workspace_bridge.errors import UpstreamError
from workspace_bridge.retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """Create the HTTP client shared by all API clients.

    Returns:
        httpx.AsyncClient with connection pooling and timeouts.
    """
    return httpx.AsyncClient(
        http2=True,
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
        timeout=httpx.Timeout(30.0, connect=10.0),
    )


def _error_message(response: httpx.Response) -> str:
    """Extract a readable message from a Google API error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return response.reason_phrase or f"HTTP {response.status_code}"


class GoogleApiClient:
    """Base class for a single Google REST API surface.

    Attributes:
        service_name: API name used in error messages.
        base_url: Root URL of the API.
        retry_policy: Policy applied to every request.
    """

    service_name = "Google"
    base_url = ""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credentials: ApplicationDefaultCredentials,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._http_client = http_client
        self._credentials = credentials
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    async def _make_request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request, retrying transient failures.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Path relative to base_url.
            params: Optional query parameters.
            json_data: Optional JSON body data.

        Returns:
            JSON response as a dictionary.

        Raises:
            UpstreamError: If the request ultimately fails.
        """

        async def attempt() -> dict[str, Any]:
            return await self._send(method, path, params=params, json_data=json_data)

        return await with_retry(attempt, self.retry_policy, sleep=self._sleep)

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        access_token = await self._credentials.get_access_token()
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                self.service_name, e.response.status_code, _error_message(e.response)
            ) from e
        except httpx.TransportError as e:
            raise UpstreamError(self.service_name, None, str(e) or type(e).__name__) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.content:
            return {}
        result: dict[str, Any] = response.json()
        return result
