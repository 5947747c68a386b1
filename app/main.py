"""TRIDASH — FastAPI Application Entry Point.

Three-provider analytics dashboard backend.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.metrics_routes import router as metrics_router
from app.api.system_routes import router as system_router
from app.config import settings
from app.core.logging import get_logger
from app.services.aggregator import get_aggregator

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 TRIDASH starting up...")
    aggregator = get_aggregator()
    for provider, adapter in aggregator.adapters.items():
        missing = adapter.missing_settings()
        if missing:
            logger.warning(
                f"⚠️  {provider.label} missing settings: {', '.join(missing)}",
                extra={"provider": provider.value},
            )
    yield
    logger.info("TRIDASH shut down")


app = FastAPI(
    title="TRIDASH",
    description="Client analytics dashboard — GA4, Google Ads and Metricool metrics, normalized per tenant.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(system_router)
app.include_router(metrics_router)
