"""TRIDASH — Metricool API Client."""

from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.connectors.http import ProviderHTTPClient


class MetricoolClient(ProviderHTTPClient):
    """Async HTTP client scoped to one Metricool brand (blogId)."""

    provider_name = "Metricool"

    def __init__(
        self,
        blog_id: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            settings.metricool_base_url,
            headers={
                "X-Mc-Auth": settings.metricool_api_token,
                "Content-Type": "application/json",
            },
            transport=transport,
        )
        self.blog_id = blog_id

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {"userId": settings.metricool_user_id, "blogId": self.blog_id}
        query.update(params or {})
        return await self.get(path, query)

    async def fetch_profile(self) -> Any:
        return await self._get("/admin/simpleProfiles")

    async def fetch_stats(self, start_date: str, end_date: str) -> Any:
        """Dates are YYYY-MM-DD."""
        return await self._get(
            "/statistics/summary", {"from": start_date, "to": end_date}
        )

    async def fetch_posts(self, limit: Optional[int] = None) -> Any:
        return await self._get(
            "/posts/list", {"limit": limit or settings.metricool_posts_limit}
        )
