"""TRIDASH — Aggregation Facade.

One call per dashboard panel:
  normalize dates → resolve tenant → map account → provider adapter → result

Tenant resolution and account mapping never fail. Adapter failures come back
as ``Failure`` results, so one panel's error never touches another's.
"""

import asyncio
import time
from datetime import datetime
from functools import lru_cache
from typing import Callable, Dict, Optional

from app.config import settings
from app.connectors.base import ProviderAdapter
from app.connectors.ga4.adapter import GA4Adapter
from app.connectors.google_ads.adapter import GoogleAdsAdapter
from app.connectors.metricool.adapter import MetricoolAdapter
from app.core.dates import DEFAULT_END, DEFAULT_START, is_ordered, resolve_range, utc_now
from app.core.errors import AuthenticationError, ErrorKind
from app.core.logging import get_logger
from app.models.accounts import Provider
from app.models.results import AggregationResult, Failure
from app.tenancy.accounts import AccountMapper, build_account_mapper
from app.tenancy.resolver import CopilotIdentityClient, TenantResolver

logger = get_logger("services.aggregator")


class MetricsAggregator:
    """Entry point the HTTP layer calls once per provider panel."""

    def __init__(
        self,
        resolver: TenantResolver,
        accounts: AccountMapper,
        adapters: Dict[Provider, ProviderAdapter],
        clock: Callable[[], datetime] = utc_now,
    ):
        self.resolver = resolver
        self.accounts = accounts
        self.adapters = adapters
        self.clock = clock

    async def get_metrics(
        self,
        token: Optional[str],
        provider: Provider,
        start: str = DEFAULT_START,
        end: str = DEFAULT_END,
        timeout: Optional[float] = None,
    ) -> AggregationResult:
        """Fetch one provider panel for the tenant behind ``token``.

        Raises AuthenticationError when no token is given; every other
        problem is returned as a result.
        """
        if not token:
            raise AuthenticationError("No token provided")

        started = time.perf_counter()
        date_range = resolve_range(start, end, self.clock())
        if not is_ordered(date_range):
            return Failure(
                kind=ErrorKind.QUERY_ERROR,
                message="Invalid date range",
                details=f"Start date {date_range.start_date} is after end date {date_range.end_date}",
                context={
                    "start_date": date_range.start_date,
                    "end_date": date_range.end_date,
                },
            )

        tenant_id = await self.resolver.resolve(token)
        account = self.accounts.map_account(tenant_id, provider)
        adapter = self.adapters[provider]

        try:
            if timeout:
                result = await asyncio.wait_for(
                    adapter.fetch(tenant_id, account, date_range), timeout
                )
            else:
                result = await adapter.fetch(tenant_id, account, date_range)
        except asyncio.TimeoutError:
            result = Failure(
                kind=ErrorKind.QUERY_ERROR,
                message=f"Failed to fetch {provider.label} data",
                details=f"Request timed out after {timeout}s",
                context={
                    "account_id": account.account_id,
                    "start_date": date_range.start_date,
                    "end_date": date_range.end_date,
                },
            )

        logger.info(
            f"{provider.label} panel {result.status}",
            extra={
                "provider": provider.value,
                "tenant_id": tenant_id,
                "account_id": account.account_id,
                "outcome": result.status,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return result


def build_adapters() -> Dict[Provider, ProviderAdapter]:
    return {
        Provider.GA4: GA4Adapter(),
        Provider.GOOGLE_ADS: GoogleAdsAdapter(),
        Provider.METRICOOL: MetricoolAdapter(),
    }


@lru_cache
def get_aggregator() -> MetricsAggregator:
    """Dependency — process-wide aggregator built from settings."""
    return MetricsAggregator(
        resolver=TenantResolver(CopilotIdentityClient()),
        accounts=build_account_mapper(),
        adapters=build_adapters(),
    )
