"""TRIDASH — GA4 Report → Normalized Transformer."""

from typing import Any, Dict, List

from app.core.metric_registry import GA4_METRICS, GA4_SERIES_METRICS, safe_int


def report_rows(report: Any) -> List[Dict[str, str]]:
    """Flatten a runReport reply into one {header name: value} dict per row.

    Headers are read from the reply rather than assumed, so column order
    does not matter.
    """
    if not isinstance(report, dict):
        return []
    dim_names = [h.get("name", "") for h in report.get("dimensionHeaders") or []]
    metric_names = [h.get("name", "") for h in report.get("metricHeaders") or []]

    rows: List[Dict[str, str]] = []
    for row in report.get("rows") or []:
        flat: Dict[str, str] = {}
        for name, cell in zip(dim_names, row.get("dimensionValues") or []):
            flat[name] = cell.get("value", "")
        for name, cell in zip(metric_names, row.get("metricValues") or []):
            flat[name] = cell.get("value", "0")
        rows.append(flat)
    return rows


def transform_totals(report: Any) -> Dict[str, Any]:
    """Totals reply → panel metrics. An empty reply yields zeros."""
    rows = report_rows(report)
    first = rows[0] if rows else {}
    return {
        name: definition.convert(first.get(definition.source_field, 0))
        for name, definition in GA4_METRICS.items()
    }


def transform_time_series(report: Any) -> List[Dict[str, Any]]:
    """Daily points. GA4 returns ``date`` as YYYYMMDD; it is kept as-is."""
    points = []
    for row in report_rows(report):
        point: Dict[str, Any] = {"date": row.get("date", "")}
        for name in GA4_SERIES_METRICS:
            point[name] = safe_int(row.get(GA4_METRICS[name].source_field))
        points.append(point)
    return sorted(points, key=lambda p: p["date"])


def transform_top_pages(report: Any) -> List[Dict[str, Any]]:
    return [
        {
            "title": row.get("pageTitle", ""),
            "path": row.get("pagePath", ""),
            "views": safe_int(row.get("screenPageViews")),
        }
        for row in report_rows(report)
    ]


def transform_traffic_sources(report: Any) -> List[Dict[str, Any]]:
    return [
        {
            "source": row.get("sessionDefaultChannelGroup", ""),
            "sessions": safe_int(row.get("sessions")),
        }
        for row in report_rows(report)
    ]


def transform_devices(report: Any) -> List[Dict[str, Any]]:
    return [
        {"device": row.get("deviceCategory", ""), "users": safe_int(row.get("activeUsers"))}
        for row in report_rows(report)
    ]


def transform_countries(report: Any) -> List[Dict[str, Any]]:
    return [
        {"country": row.get("country", ""), "users": safe_int(row.get("activeUsers"))}
        for row in report_rows(report)
    ]
