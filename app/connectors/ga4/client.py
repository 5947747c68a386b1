"""TRIDASH — GA4 Data API Client.

Builds and runs the six ``runReport`` queries behind the web analytics panel.
"""

from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.connectors.http import ProviderHTTPClient
from app.core.metric_registry import GA4_METRICS, GA4_SERIES_METRICS

TOTALS_METRICS = [m.source_field for m in GA4_METRICS.values()]
SERIES_METRICS = [GA4_METRICS[name].source_field for name in GA4_SERIES_METRICS]
TOP_N = 10


def _report_body(
    start_date: str,
    end_date: str,
    metrics: List[str],
    dimensions: Optional[List[str]] = None,
    order_by: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "dateRanges": [{"startDate": start_date, "endDate": end_date}],
        "metrics": [{"name": name} for name in metrics],
    }
    if dimensions:
        body["dimensions"] = [{"name": name} for name in dimensions]
    if order_by:
        body["orderBys"] = [order_by]
    if limit:
        body["limit"] = str(limit)
    return body


def _by_metric_desc(metric: str) -> Dict[str, Any]:
    return {"metric": {"metricName": metric}, "desc": True}


class GA4Client(ProviderHTTPClient):
    """Async HTTP client for the GA4 Data API (v1beta)."""

    provider_name = "GA4"

    def __init__(
        self,
        property_id: str,
        access_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        token = access_token or settings.ga4_access_token
        super().__init__(
            settings.ga4_base_url,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )
        self.property_id = property_id

    async def run_report(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/properties/{self.property_id}:runReport", json=body
        )

    # ── Reports ──

    async def fetch_totals(self, start_date: str, end_date: str) -> Dict[str, Any]:
        """Aggregate totals for the whole period (no dimensions)."""
        return await self.run_report(_report_body(start_date, end_date, TOTALS_METRICS))

    async def fetch_time_series(self, start_date: str, end_date: str) -> Dict[str, Any]:
        return await self.run_report(
            _report_body(
                start_date,
                end_date,
                SERIES_METRICS,
                dimensions=["date"],
                order_by={"dimension": {"dimensionName": "date"}},
            )
        )

    async def fetch_top_pages(self, start_date: str, end_date: str) -> Dict[str, Any]:
        return await self.run_report(
            _report_body(
                start_date,
                end_date,
                ["screenPageViews"],
                dimensions=["pageTitle", "pagePath"],
                order_by=_by_metric_desc("screenPageViews"),
                limit=TOP_N,
            )
        )

    async def fetch_traffic_sources(
        self, start_date: str, end_date: str
    ) -> Dict[str, Any]:
        return await self.run_report(
            _report_body(
                start_date,
                end_date,
                ["sessions"],
                dimensions=["sessionDefaultChannelGroup"],
                order_by=_by_metric_desc("sessions"),
            )
        )

    async def fetch_devices(self, start_date: str, end_date: str) -> Dict[str, Any]:
        return await self.run_report(
            _report_body(
                start_date,
                end_date,
                ["activeUsers"],
                dimensions=["deviceCategory"],
                order_by=_by_metric_desc("activeUsers"),
            )
        )

    async def fetch_countries(self, start_date: str, end_date: str) -> Dict[str, Any]:
        return await self.run_report(
            _report_body(
                start_date,
                end_date,
                ["activeUsers"],
                dimensions=["country"],
                order_by=_by_metric_desc("activeUsers"),
                limit=TOP_N,
            )
        )
