"""TRIDASH — Unified Metric Registry.

Defines the canonical metrics each provider panel exposes, the provider
field each one is read from, and the unit conversion applied on the way in.
Transformers look metrics up here so every provider normalizes the same way.
"""

from enum import Enum
from typing import Any, Dict


class MetricType(str, Enum):
    """How a metric is categorised."""

    VOLUME = "volume"  # Raw counts: users, sessions, impressions
    DURATION = "duration"  # Seconds
    COST = "cost"  # Monetary: cost, cpc
    REVENUE = "revenue"  # Conversion value
    RATE = "rate"  # Fractions shown as percentages


class Conversion(str, Enum):
    """Unit conversion from the provider's native value."""

    INTEGER = "integer"
    FLOAT = "float"
    MICROS = "micros"  # 1/1,000,000 currency units
    PERCENT = "percent"  # fraction 0-1 → "12.34"


class MetricDefinition:
    """Describes a single metric."""

    def __init__(
        self,
        name: str,
        metric_type: MetricType,
        source_field: str,
        conversion: Conversion,
        unit: str = "",
        description: str = "",
    ):
        self.name = name
        self.metric_type = metric_type
        self.source_field = source_field
        self.conversion = conversion
        self.unit = unit
        self.description = description

    def convert(self, raw: Any) -> Any:
        """Apply this metric's conversion to a raw provider value."""
        if self.conversion == Conversion.INTEGER:
            return safe_int(raw)
        if self.conversion == Conversion.MICROS:
            return micros_to_currency(raw)
        if self.conversion == Conversion.PERCENT:
            return to_percent_string(raw)
        return safe_float(raw)

    def describe(self) -> Dict[str, str]:
        """Catalog entry for clients rendering this metric."""
        return {
            "name": self.name,
            "type": self.metric_type.value,
            "unit": self.unit,
            "description": self.description,
        }

    def __repr__(self) -> str:
        return f"<Metric {self.name} ({self.metric_type.value})>"


# ─────────────────────────────────────────────
# CONVERSIONS
# ─────────────────────────────────────────────

MICROS_PER_UNIT = 1_000_000


def safe_float(value: Any) -> float:
    """Safely convert a value to float."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def safe_int(value: Any) -> int:
    """Safely convert a value (often a numeric string) to int."""
    return int(safe_float(value))


def micros_to_currency(value: Any) -> float:
    """1_500_000 → 1.5"""
    return round(safe_float(value) / MICROS_PER_UNIT, 2)


def to_percent_string(fraction: Any) -> str:
    """0.0342 → "3.42"."""
    return f"{safe_float(fraction) * 100:.2f}"


# ─────────────────────────────────────────────
# GA4 METRICS — Web analytics panel
# ─────────────────────────────────────────────

GA4_METRICS: Dict[str, MetricDefinition] = {
    "activeUsers": MetricDefinition(
        "activeUsers", MetricType.VOLUME, "activeUsers", Conversion.INTEGER, "count",
        "Distinct users who engaged",
    ),
    "sessions": MetricDefinition(
        "sessions", MetricType.VOLUME, "sessions", Conversion.INTEGER, "count",
        "Sessions started",
    ),
    "pageViews": MetricDefinition(
        "pageViews", MetricType.VOLUME, "screenPageViews", Conversion.INTEGER,
        "count", "Page and screen views",
    ),
    "avgSessionDuration": MetricDefinition(
        "avgSessionDuration", MetricType.DURATION, "averageSessionDuration",
        Conversion.FLOAT, "s", "Average session length",
    ),
    "bounceRate": MetricDefinition(
        "bounceRate", MetricType.RATE, "bounceRate", Conversion.PERCENT, "%",
        "Share of sessions that were not engaged",
    ),
    "newUsers": MetricDefinition(
        "newUsers", MetricType.VOLUME, "newUsers", Conversion.INTEGER, "count",
        "First-time users",
    ),
    "engagementRate": MetricDefinition(
        "engagementRate", MetricType.RATE, "engagementRate", Conversion.PERCENT,
        "%", "Share of sessions that were engaged",
    ),
}

# Daily volume series
GA4_SERIES_METRICS = ["activeUsers", "sessions", "pageViews"]


# ─────────────────────────────────────────────
# GOOGLE ADS METRICS — Advertising panel
# Source fields are the REST (camelCase) names under "metrics".
# ─────────────────────────────────────────────

GOOGLE_ADS_METRICS: Dict[str, MetricDefinition] = {
    "impressions": MetricDefinition(
        "impressions", MetricType.VOLUME, "impressions", Conversion.INTEGER,
        "count", "Times an ad was shown",
    ),
    "clicks": MetricDefinition(
        "clicks", MetricType.VOLUME, "clicks", Conversion.INTEGER, "count",
        "Ad clicks",
    ),
    "ctr": MetricDefinition(
        "ctr", MetricType.RATE, "ctr", Conversion.PERCENT, "%",
        "Click-through rate",
    ),
    "cost": MetricDefinition(
        "cost", MetricType.COST, "costMicros", Conversion.MICROS, "currency",
        "Total spend",
    ),
    "conversions": MetricDefinition(
        "conversions", MetricType.VOLUME, "conversions", Conversion.FLOAT, "count",
        "Attributed conversions",
    ),
    "conversionsValue": MetricDefinition(
        "conversionsValue", MetricType.REVENUE, "conversionsValue",
        Conversion.FLOAT, "currency", "Value of attributed conversions",
    ),
    "averageCpc": MetricDefinition(
        "averageCpc", MetricType.COST, "averageCpc", Conversion.MICROS, "currency",
        "Average cost per click",
    ),
}

# Campaign rows carry every account metric except averageCpc
GOOGLE_ADS_CAMPAIGN_METRICS = [
    name for name in GOOGLE_ADS_METRICS if name != "averageCpc"
]

