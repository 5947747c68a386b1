"""TRIDASH — Google Ads Advertising Adapter."""

from typing import Dict, Optional

from app.config import settings
from app.connectors.base import ProviderAdapter, gather_settled
from app.connectors.google_ads import transformer
from app.connectors.google_ads.client import GoogleAdsClient
from app.core.dates import to_compact
from app.core.metric_registry import GOOGLE_ADS_METRICS
from app.models.accounts import Provider, ProviderAccountConfig
from app.models.results import DateRange, NormalizedMetricsRecord


class GoogleAdsAdapter(ProviderAdapter):
    provider = Provider.GOOGLE_ADS
    metric_definitions = GOOGLE_ADS_METRICS

    def required_settings(self) -> Dict[str, str]:
        return {
            "google_ads_access_token": settings.google_ads_access_token,
            "google_ads_developer_token": settings.google_ads_developer_token,
        }

    def not_configured_reason(self, account: ProviderAccountConfig) -> Optional[str]:
        if account.has_advertising_account is False:
            return f"{account.name or 'This account'} has no Google Ads account"
        return None

    async def collect(
        self,
        tenant_id: str,
        account: ProviderAccountConfig,
        date_range: DateRange,
    ) -> NormalizedMetricsRecord:
        start = to_compact(date_range.start_date)
        end = to_compact(date_range.end_date)

        async with GoogleAdsClient(account.account_id, transport=self.transport) as client:
            outcomes = await gather_settled(
                account=client.fetch_account_metrics(start, end),
                campaigns=client.fetch_campaigns(start, end),
            )

        metrics = self.primary(outcomes["account"], transformer.transform_account_metrics)
        return NormalizedMetricsRecord(
            provider=self.provider,
            tenant_id=tenant_id,
            account_id=account.account_id,
            account_name=account.name,
            date_range=date_range,
            metrics=metrics,
            breakdowns={
                "campaigns": self.breakdown(
                    "campaigns",
                    outcomes["campaigns"],
                    transformer.transform_campaigns,
                    tenant_id,
                )
            },
        )
