"""TRIDASH — Shared Provider HTTP Client.

One async httpx client per adapter call. Maps HTTP and transport failures
onto the provider error taxonomy. Never retries.
"""

from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.core.errors import ProviderAuthError, ProviderQueryError
from app.core.logging import get_logger

logger = get_logger("connectors.http")


def _error_message(response: httpx.Response) -> str:
    """Pull the provider's own error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error)
        if error:
            return str(error)
        if body.get("message"):
            return str(body["message"])
    return str(body)[:500]


class ProviderHTTPClient:
    """Async HTTP client bound to one provider's base URL and auth headers."""

    provider_name = "provider"

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ProviderHTTPClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ── Core Request Method ──

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a single request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        try:
            resp = await client.request(method, url, params=params, json=json)
        except httpx.TimeoutException as e:
            raise ProviderQueryError(
                f"{self.provider_name} request timed out", provider_message=str(e)
            ) from e
        except httpx.RequestError as e:
            raise ProviderQueryError(
                f"{self.provider_name} connection failed", provider_message=str(e)
            ) from e

        if resp.status_code in (401, 403):
            raise ProviderAuthError(
                f"{self.provider_name} rejected credentials",
                status_code=resp.status_code,
                provider_message=_error_message(resp),
            )
        if resp.is_error:
            logger.warning(
                f"{self.provider_name} {method} {path} failed with {resp.status_code}",
                extra={"status_code": resp.status_code},
            )
            raise ProviderQueryError(
                f"{self.provider_name} API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                provider_message=_error_message(resp),
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderQueryError(
                f"{self.provider_name} returned a non-JSON body",
                status_code=resp.status_code,
                provider_message=str(e),
            ) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)
