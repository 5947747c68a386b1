"""TRIDASH — System Routes."""

from fastapi import APIRouter, Depends

from app.services.aggregator import MetricsAggregator, get_aggregator

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "tridash",
        "version": "1.0.0",
    }


@router.get("/providers/status")
async def providers_status(aggregator: MetricsAggregator = Depends(get_aggregator)):
    """Report which providers have their credentials configured.

    Lists missing setting names only, never values, plus the catalog of
    flat metrics each panel reports with their units.
    """
    return {
        "status": "success",
        "providers": {
            provider.value: {
                "label": provider.label,
                "configured": adapter.is_available(),
                "missing": adapter.missing_settings(),
                "metrics": [
                    definition.describe()
                    for definition in adapter.metric_definitions.values()
                ],
            }
            for provider, adapter in aggregator.adapters.items()
        },
    }
