"""TRIDASH — Abstract Provider Adapter.

All three providers share one fetch contract:

    await adapter.fetch(tenant_id, account, date_range) -> AggregationResult

The base class owns the steps that are identical everywhere (credential
check, error → Failure mapping, fan-out join); subclasses only build their
queries and compose the record.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from app.core.errors import ConfigurationError, ProviderError, ProviderQueryError
from app.core.metric_registry import MetricDefinition
from app.core.logging import get_logger
from app.models.accounts import Provider, ProviderAccountConfig
from app.models.results import (
    AggregationResult,
    DateRange,
    Failure,
    NormalizedMetricsRecord,
    NotConfigured,
    Success,
)

logger = get_logger("connectors.base")

# What a transformer raises when a 200 reply is not the shape it expects
MALFORMED_REPLY = (AttributeError, KeyError, IndexError, TypeError, ValueError)


async def gather_settled(
    **calls: Awaitable[Any],
) -> Dict[str, Union[Any, BaseException]]:
    """Run named sub-queries concurrently and collect every outcome.

    Each value is either the call's result or the exception it raised; one
    failure never cancels its siblings.
    """
    names = list(calls)
    outcomes = await asyncio.gather(*calls.values(), return_exceptions=True)
    return dict(zip(names, outcomes))


def failed(outcome: Any) -> bool:
    return isinstance(outcome, BaseException)


class ProviderAdapter(ABC):
    """Base for the GA4, Google Ads and Metricool adapters."""

    provider: Provider
    # Metrics this provider reports in the flat ``metrics`` dict
    metric_definitions: Dict[str, MetricDefinition] = {}

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Tests inject an httpx.MockTransport here
        self.transport = transport

    # ── Configuration ──

    @abstractmethod
    def required_settings(self) -> Dict[str, str]:
        """Setting name → current value, for every credential this provider needs."""
        ...

    def missing_settings(self) -> List[str]:
        return [name for name, value in self.required_settings().items() if not value]

    def is_available(self) -> bool:
        """Check if this provider is configured and ready."""
        return not self.missing_settings()

    def not_configured_reason(self, account: ProviderAccountConfig) -> Optional[str]:
        """Return a reason when the tenant legitimately has no account here."""
        return None

    # ── Fetch ──

    @abstractmethod
    async def collect(
        self,
        tenant_id: str,
        account: ProviderAccountConfig,
        date_range: DateRange,
    ) -> NormalizedMetricsRecord:
        """Query the provider and compose the normalized record.

        Raises ProviderError when the primary query fails.
        """
        ...

    async def fetch(
        self,
        tenant_id: str,
        account: ProviderAccountConfig,
        date_range: DateRange,
    ) -> AggregationResult:
        """Fetch one provider panel and wrap the outcome."""
        context: Dict[str, Any] = {
            "account_id": account.account_id,
            "start_date": date_range.start_date,
            "end_date": date_range.end_date,
        }

        reason = self.not_configured_reason(account)
        if reason:
            logger.info(
                f"{self.provider.label} not configured: {reason}",
                extra={"provider": self.provider.value, "tenant_id": tenant_id},
            )
            return NotConfigured(reason=reason)

        missing = self.missing_settings()
        if missing:
            error = ConfigurationError("Server configuration error", missing=missing)
            logger.error(
                f"{self.provider.label} missing configuration: {', '.join(missing)}",
                extra={"provider": self.provider.value},
            )
            return Failure(
                kind=error.kind,
                message=error.message,
                details=f"Missing settings: {', '.join(missing)}",
                context={**context, "missing": missing},
            )

        try:
            record = await self.collect(tenant_id, account, date_range)
        except ProviderError as e:
            logger.error(
                f"{self.provider.label} fetch failed: {e.message} ({e.provider_message})",
                extra={
                    "provider": self.provider.value,
                    "tenant_id": tenant_id,
                    "account_id": account.account_id,
                    "status_code": e.status_code,
                },
            )
            return Failure(
                kind=e.kind,
                message=f"Failed to fetch {self.provider.label} data",
                details=e.provider_message or e.message,
                context={**context, "status_code": e.status_code},
            )
        return Success(record=record)

    # ── Helpers for subclasses ──

    def degrade(self, name: str, outcome: Any, tenant_id: str) -> bool:
        """Log a failed breakdown sub-query. Returns True if it failed."""
        if not failed(outcome):
            return False
        logger.warning(
            f"{self.provider.label} {name} query failed, returning empty: {outcome}",
            extra={"provider": self.provider.value, "tenant_id": tenant_id},
        )
        return True

    @staticmethod
    def raise_primary(outcome: Any) -> None:
        """Re-raise the primary sub-query's exception, if it had one."""
        if isinstance(outcome, BaseException):
            raise outcome

    def primary(self, outcome: Any, transform: Callable[[Any], Any]) -> Any:
        """Transform the primary sub-query's reply.

        A failed query is re-raised; a reply of the wrong shape becomes a
        ProviderQueryError so the panel fails as a query error.
        """
        self.raise_primary(outcome)
        try:
            return transform(outcome)
        except MALFORMED_REPLY as e:
            raise ProviderQueryError(
                f"{self.provider.label} returned an unexpected reply",
                provider_message=f"Unexpected reply shape: {e}",
            ) from e

    def breakdown(
        self,
        name: str,
        outcome: Any,
        transform: Callable[[Any], List[Dict[str, Any]]],
        tenant_id: str,
    ) -> List[Dict[str, Any]]:
        """Transform a breakdown reply, or [] if its query or reply was bad."""
        if self.degrade(name, outcome, tenant_id):
            return []
        try:
            return transform(outcome)
        except MALFORMED_REPLY as e:
            logger.warning(
                f"{self.provider.label} {name} reply malformed, returning empty: {e}",
                extra={"provider": self.provider.value, "tenant_id": tenant_id},
            )
            return []
