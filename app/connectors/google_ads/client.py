"""TRIDASH — Google Ads API Client.

GAQL queries over the REST ``googleAds:search`` endpoint.
"""

from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.connectors.http import ProviderHTTPClient

CAMPAIGN_LIMIT = 10

# GAQL uses snake_case field names; the REST reply comes back camelCase.
CAMPAIGN_QUERY = """
    SELECT
      campaign.id,
      campaign.name,
      campaign.status,
      metrics.impressions,
      metrics.clicks,
      metrics.ctr,
      metrics.cost_micros,
      metrics.conversions,
      metrics.conversions_value
    FROM campaign
    WHERE segments.date BETWEEN '{start}' AND '{end}'
      AND campaign.status != 'REMOVED'
    ORDER BY metrics.impressions DESC
    LIMIT {limit}
"""

ACCOUNT_QUERY = """
    SELECT
      metrics.impressions,
      metrics.clicks,
      metrics.ctr,
      metrics.cost_micros,
      metrics.conversions,
      metrics.conversions_value,
      metrics.average_cpc
    FROM customer
    WHERE segments.date BETWEEN '{start}' AND '{end}'
"""


def build_campaign_query(start: str, end: str, limit: int = CAMPAIGN_LIMIT) -> str:
    """Dates must already be compact YYYYMMDD."""
    return CAMPAIGN_QUERY.format(start=start, end=end, limit=limit)


def build_account_query(start: str, end: str) -> str:
    return ACCOUNT_QUERY.format(start=start, end=end)


class GoogleAdsClient(ProviderHTTPClient):
    """Async HTTP client for one Google Ads customer."""

    provider_name = "Google Ads"

    def __init__(
        self,
        customer_id: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Authorization": f"Bearer {settings.google_ads_access_token}",
            "developer-token": settings.google_ads_developer_token,
        }
        if settings.google_ads_login_customer_id:
            headers["login-customer-id"] = settings.google_ads_login_customer_id.replace(
                "-", ""
            )
        super().__init__(
            f"{settings.google_ads_base_url}/{settings.google_ads_api_version}",
            headers=headers,
            transport=transport,
        )
        self.customer_id = customer_id.replace("-", "")

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Run a GAQL query and return its result rows."""
        result = await self._request(
            "POST",
            f"/customers/{self.customer_id}/googleAds:search",
            json={"query": query},
        )
        if not isinstance(result, dict):
            return []
        return result.get("results") or []

    async def fetch_account_metrics(self, start: str, end: str) -> List[Dict[str, Any]]:
        return await self.search(build_account_query(start, end))

    async def fetch_campaigns(self, start: str, end: str) -> List[Dict[str, Any]]:
        return await self.search(build_campaign_query(start, end))
