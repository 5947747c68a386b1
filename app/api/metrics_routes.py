"""TRIDASH — Provider Metrics Routes.

One endpoint per dashboard panel. Each returns the normalized record on
success or an ``{"error", "details"}`` document with a status code matching
the failure class.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.dates import DEFAULT_END, DEFAULT_START, PRESETS, preset_tokens
from app.core.errors import AuthenticationError, ErrorKind
from app.core.logging import get_logger
from app.models.accounts import Provider
from app.models.results import Failure, NotConfigured
from app.services.aggregator import MetricsAggregator, get_aggregator

logger = get_logger("api.metrics")

router = APIRouter(prefix="/api", tags=["Metrics"])

FAILURE_STATUS = {
    ErrorKind.AUTH_ERROR: 401,
    ErrorKind.CONFIG_ERROR: 500,
    ErrorKind.QUERY_ERROR: 502,
}


async def _panel(
    aggregator: MetricsAggregator,
    provider: Provider,
    token: Optional[str],
    start_date: str,
    end_date: str,
    range_preset: Optional[str],
):
    """Run one panel request and render its result."""
    if not token:
        return JSONResponse({"error": "No token provided"}, status_code=401)

    if range_preset:
        try:
            start_date, end_date = preset_tokens(range_preset)
        except KeyError:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown range '{range_preset}'. Use one of: {', '.join(PRESETS)}",
            )

    try:
        result = await aggregator.get_metrics(
            token,
            provider,
            start_date,
            end_date,
            timeout=settings.request_timeout_seconds,
        )
    except AuthenticationError as e:
        return JSONResponse({"error": e.message}, status_code=401)

    if isinstance(result, NotConfigured):
        logger.info(
            f"{provider.label} panel not configured: {result.reason}",
            extra={"provider": provider.value, "status_code": 404},
        )
        return JSONResponse(
            {
                "error": f"{provider.label} not configured for this account",
                "details": result.reason,
            },
            status_code=404,
        )
    if isinstance(result, Failure):
        status_code = FAILURE_STATUS[result.kind]
        logger.warning(
            f"{provider.label} panel failed: {result.message} ({result.details})",
            extra={
                "provider": provider.value,
                "account_id": result.context.get("account_id"),
                "status_code": status_code,
            },
        )
        return JSONResponse(
            {
                "error": result.message,
                "details": result.details,
                "context": result.context,
            },
            status_code=status_code,
        )
    return result.record.model_dump(mode="json")


# ── Endpoints ──


@router.get("/ga4/metrics")
async def get_ga4_metrics(
    token: Optional[str] = Query(None, description="Session token"),
    start_date: str = Query(DEFAULT_START, alias="startDate"),
    end_date: str = Query(DEFAULT_END, alias="endDate"),
    range_preset: Optional[str] = Query(None, alias="range"),
    aggregator: MetricsAggregator = Depends(get_aggregator),
):
    """Website analytics: totals, daily series, top pages, sources, devices, countries."""
    return await _panel(aggregator, Provider.GA4, token, start_date, end_date, range_preset)


@router.get("/google-ads/metrics")
async def get_google_ads_metrics(
    token: Optional[str] = Query(None, description="Session token"),
    start_date: str = Query(DEFAULT_START, alias="startDate"),
    end_date: str = Query(DEFAULT_END, alias="endDate"),
    range_preset: Optional[str] = Query(None, alias="range"),
    aggregator: MetricsAggregator = Depends(get_aggregator),
):
    """Advertising: account totals and the top 10 campaigns by impressions."""
    return await _panel(
        aggregator, Provider.GOOGLE_ADS, token, start_date, end_date, range_preset
    )


@router.get("/metricool/metrics")
async def get_metricool_metrics(
    token: Optional[str] = Query(None, description="Session token"),
    start_date: str = Query(DEFAULT_START, alias="startDate"),
    end_date: str = Query(DEFAULT_END, alias="endDate"),
    range_preset: Optional[str] = Query(None, alias="range"),
    aggregator: MetricsAggregator = Depends(get_aggregator),
):
    """Social: profile, period statistics and recent posts (provisional shape)."""
    return await _panel(
        aggregator, Provider.METRICOOL, token, start_date, end_date, range_preset
    )
