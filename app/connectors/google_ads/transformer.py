"""TRIDASH — Google Ads Rows → Normalized Transformer.

Cost fields arrive in micros and CTR as a fraction; the metric registry
converts both.
"""

from typing import Any, Dict, List

from app.core.metric_registry import GOOGLE_ADS_CAMPAIGN_METRICS, GOOGLE_ADS_METRICS


def _metrics_of(row: Dict[str, Any], names: List[str]) -> Dict[str, Any]:
    raw = row.get("metrics") or {}
    return {
        name: GOOGLE_ADS_METRICS[name].convert(raw.get(GOOGLE_ADS_METRICS[name].source_field, 0))
        for name in names
    }


def transform_account_metrics(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Account totals. No rows (no activity in range) yields zeros."""
    first = rows[0] if rows else {}
    return _metrics_of(first, list(GOOGLE_ADS_METRICS))


def transform_campaigns(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    campaigns = []
    for row in rows:
        campaign = row.get("campaign") or {}
        campaigns.append(
            {
                "id": str(campaign.get("id", "")),
                "name": campaign.get("name") or "Unknown Campaign",
                "status": campaign.get("status", ""),
                **_metrics_of(row, GOOGLE_ADS_CAMPAIGN_METRICS),
            }
        )
    return campaigns
