"""TRIDASH — Tenant Resolver.

Maps a session token to a company (tenant) id via the identity service.
Any failure degrades to the "default" tenant so the dashboard keeps
rendering; rejecting requests with no token at all is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.connectors.http import ProviderHTTPClient
from app.core.errors import ConfigurationError
from app.core.logging import get_logger
from app.tenancy.accounts import DEFAULT_TENANT

logger = get_logger("tenancy.resolver")


class IdentityProvider(ABC):
    """Abstract session/identity service."""

    @abstractmethod
    async def get_token_payload(self, token: str) -> Dict[str, Any]:
        """Return the decoded session payload (expects a ``companyId`` key)."""
        ...


class CopilotHTTPClient(ProviderHTTPClient):
    provider_name = "Copilot"


class CopilotIdentityClient(IdentityProvider):
    """Copilot (Assembly) session lookup over HTTP."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.copilot_api_key
        self.transport = transport

    async def get_token_payload(self, token: str) -> Dict[str, Any]:
        if not self.api_key:
            raise ConfigurationError(
                "Identity service not configured", missing=["copilot_api_key"]
            )
        client = CopilotHTTPClient(
            settings.copilot_base_url,
            headers={"X-API-KEY": self.api_key},
            transport=self.transport,
        )
        async with client:
            payload = await client.get(
                settings.copilot_token_path, params={"token": token}
            )
        return payload if isinstance(payload, dict) else {}


class TenantResolver:
    """Resolve a session token to a tenant id. Never raises."""

    def __init__(self, identity: Optional[IdentityProvider] = None):
        self.identity = identity

    async def resolve(self, token: Optional[str]) -> str:
        if not token or self.identity is None:
            return DEFAULT_TENANT

        try:
            payload = await self.identity.get_token_payload(token)
        except Exception as e:
            logger.warning(f"Tenant resolution failed, using default tenant: {e}")
            return DEFAULT_TENANT

        company_id = payload.get("companyId") if isinstance(payload, dict) else None
        if not company_id or not isinstance(company_id, str):
            logger.info("Session has no companyId, using default tenant")
            return DEFAULT_TENANT
        return company_id
