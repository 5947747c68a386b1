"""TRIDASH — GA4 Web Analytics Adapter.

Six concurrent reports over one property. Totals are required; each
breakdown degrades to an empty list on its own.
"""

from typing import Any, Callable, Dict, List

from app.config import settings
from app.connectors.base import ProviderAdapter, gather_settled
from app.connectors.ga4 import transformer
from app.connectors.ga4.client import GA4Client
from app.core.metric_registry import GA4_METRICS
from app.models.accounts import Provider, ProviderAccountConfig
from app.models.results import DateRange, NormalizedMetricsRecord

BREAKDOWN_TRANSFORMS: Dict[str, Callable[[Any], List[Dict[str, Any]]]] = {
    "timeSeries": transformer.transform_time_series,
    "topPages": transformer.transform_top_pages,
    "trafficSources": transformer.transform_traffic_sources,
    "devices": transformer.transform_devices,
    "countries": transformer.transform_countries,
}


class GA4Adapter(ProviderAdapter):
    provider = Provider.GA4
    metric_definitions = GA4_METRICS

    def required_settings(self) -> Dict[str, str]:
        return {"ga4_access_token": settings.ga4_access_token}

    async def collect(
        self,
        tenant_id: str,
        account: ProviderAccountConfig,
        date_range: DateRange,
    ) -> NormalizedMetricsRecord:
        start, end = date_range.start_date, date_range.end_date

        async with GA4Client(account.account_id, transport=self.transport) as client:
            outcomes = await gather_settled(
                totals=client.fetch_totals(start, end),
                timeSeries=client.fetch_time_series(start, end),
                topPages=client.fetch_top_pages(start, end),
                trafficSources=client.fetch_traffic_sources(start, end),
                devices=client.fetch_devices(start, end),
                countries=client.fetch_countries(start, end),
            )

        metrics = self.primary(outcomes["totals"], transformer.transform_totals)
        breakdowns = {
            name: self.breakdown(name, outcomes[name], transform, tenant_id)
            for name, transform in BREAKDOWN_TRANSFORMS.items()
        }

        return NormalizedMetricsRecord(
            provider=self.provider,
            tenant_id=tenant_id,
            account_id=account.account_id,
            account_name=account.name,
            date_range=date_range,
            metrics=metrics,
            breakdowns=breakdowns,
        )
