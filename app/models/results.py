"""TRIDASH — Normalized Output Models (Universal Schema).

Every provider adapter normalizes into ``NormalizedMetricsRecord`` and
reports through one of the three ``AggregationResult`` variants.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.core.errors import ErrorKind
from app.models.accounts import Provider


class DateRange(BaseModel):
    """Resolved date range, YYYY-MM-DD on both bounds."""

    start_date: str
    end_date: str


MetricValue = Union[int, float, str, None]


class NormalizedMetricsRecord(BaseModel):
    """Unified output of one provider adapter.

    ``breakdowns`` always holds every collection the provider declares,
    empty when its sub-query failed. ``sections`` carries opaque
    pass-through payloads (social provider only) and may hold nulls.
    """

    provider: Provider
    tenant_id: str
    account_id: str
    account_name: str = ""
    date_range: DateRange
    metrics: Dict[str, MetricValue] = Field(default_factory=dict)
    breakdowns: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    sections: Dict[str, Any] = Field(default_factory=dict)


class Success(BaseModel):
    status: Literal["success"] = "success"
    record: NormalizedMetricsRecord


class NotConfigured(BaseModel):
    """Tenant has no account on this provider (advertising only)."""

    status: Literal["not_configured"] = "not_configured"
    reason: str


class Failure(BaseModel):
    """A provider panel could not be built."""

    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str
    details: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)


AggregationResult = Annotated[
    Union[Success, NotConfigured, Failure], Field(discriminator="status")
]
