"""TRIDASH — Metricool Social Adapter.

The Metricool reply schema is not pinned down yet, so profile and stats are
passed through untouched under ``sections``. Each of the three calls fails
on its own: a failed section becomes null, failed posts become [].
"""

from typing import Any, Dict, List

from app.config import settings
from app.connectors.base import ProviderAdapter, gather_settled
from app.connectors.metricool.client import MetricoolClient
from app.models.accounts import Provider, ProviderAccountConfig
from app.models.results import DateRange, NormalizedMetricsRecord


def extract_posts(payload: Any) -> List[Dict[str, Any]]:
    """Posts come back either as a bare list or wrapped in {"data": [...]}."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        return []
    return [post if isinstance(post, dict) else {"value": post} for post in payload]


class MetricoolAdapter(ProviderAdapter):
    provider = Provider.METRICOOL

    def required_settings(self) -> Dict[str, str]:
        return {
            "metricool_api_token": settings.metricool_api_token,
            "metricool_user_id": settings.metricool_user_id,
        }

    async def collect(
        self,
        tenant_id: str,
        account: ProviderAccountConfig,
        date_range: DateRange,
    ) -> NormalizedMetricsRecord:
        async with MetricoolClient(account.account_id, transport=self.transport) as client:
            outcomes = await gather_settled(
                profile=client.fetch_profile(),
                stats=client.fetch_stats(date_range.start_date, date_range.end_date),
                posts=client.fetch_posts(),
            )

        sections: Dict[str, Any] = {}
        for name in ("profile", "stats"):
            outcome = outcomes[name]
            sections[name] = None if self.degrade(name, outcome, tenant_id) else outcome

        return NormalizedMetricsRecord(
            provider=self.provider,
            tenant_id=tenant_id,
            account_id=account.account_id,
            account_name=account.name,
            date_range=date_range,
            breakdowns={
                "posts": self.breakdown("posts", outcomes["posts"], extract_posts, tenant_id)
            },
            sections=sections,
        )
