"""Shared fixtures: fake provider HTTP via httpx.MockTransport, fixed clock."""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest

from app.config import settings

REFERENCE = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)

Reply = Union[httpx.Response, Any]


@pytest.fixture
def configured(monkeypatch):
    """Fill in every provider credential."""
    values = {
        "ga4_access_token": "ga4-token",
        "google_ads_access_token": "ads-token",
        "google_ads_developer_token": "dev-token",
        "metricool_api_token": "mc-token",
        "metricool_user_id": "42",
        "copilot_api_key": "copilot-key",
    }
    for name, value in values.items():
        monkeypatch.setattr(settings, name, value)
    return values


class FakeProvider:
    """MockTransport handler that records requests and routes them by key."""

    def __init__(self, route: Callable[[httpx.Request], str], replies: Dict[str, Reply]):
        self.route = route
        self.replies = replies
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.get(self.route(request), {})
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def keys(self) -> List[str]:
        return [self.route(r) for r in self.requests]


def error_response(status: int, message: str = "boom") -> httpx.Response:
    return httpx.Response(status, json={"error": {"code": status, "message": message}})


# ── GA4 ──

GA4_DIMENSION_KEYS = {
    "date": "timeSeries",
    "pageTitle": "topPages",
    "sessionDefaultChannelGroup": "trafficSources",
    "deviceCategory": "devices",
    "country": "countries",
}


def ga4_route(request: httpx.Request) -> str:
    body = json.loads(request.content)
    dims = [d["name"] for d in body.get("dimensions", [])]
    return GA4_DIMENSION_KEYS[dims[0]] if dims else "totals"


def ga4_report(
    dimensions: List[str], metrics: List[str], rows: List[List[str]]
) -> Dict[str, Any]:
    """Build a runReport reply; each row lists dimension values then metric values."""
    n = len(dimensions)
    return {
        "dimensionHeaders": [{"name": d} for d in dimensions],
        "metricHeaders": [{"name": m, "type": "TYPE_INTEGER"} for m in metrics],
        "rows": [
            {
                "dimensionValues": [{"value": v} for v in row[:n]],
                "metricValues": [{"value": v} for v in row[n:]],
            }
            for row in rows
        ],
        "rowCount": len(rows),
    }


GA4_TOTALS = ga4_report(
    [],
    [
        "activeUsers",
        "sessions",
        "screenPageViews",
        "averageSessionDuration",
        "bounceRate",
        "newUsers",
        "engagementRate",
    ],
    [["120", "150", "480", "95.5", "0.4213", "80", "0.5787"]],
)


def ga4_replies(**overrides: Reply) -> Dict[str, Reply]:
    replies: Dict[str, Reply] = {
        "totals": GA4_TOTALS,
        "timeSeries": ga4_report(
            ["date"],
            ["activeUsers", "sessions", "screenPageViews"],
            [["20240309", "20", "25", "70"], ["20240308", "10", "12", "40"]],
        ),
        "topPages": ga4_report(
            ["pageTitle", "pagePath"],
            ["screenPageViews"],
            [["Home", "/", "300"], ["Contact", "/contact", "50"]],
        ),
        "trafficSources": ga4_report(
            ["sessionDefaultChannelGroup"], ["sessions"], [["Organic Search", "90"]]
        ),
        "devices": ga4_report(["deviceCategory"], ["activeUsers"], [["mobile", "70"]]),
        "countries": ga4_report(["country"], ["activeUsers"], [["United States", "100"]]),
    }
    replies.update(overrides)
    return replies


# ── Google Ads ──


def ads_route(request: httpx.Request) -> str:
    query = json.loads(request.content)["query"]
    return "campaigns" if "FROM campaign" in query else "account"


ADS_ACCOUNT = {
    "results": [
        {
            "metrics": {
                "impressions": "10000",
                "clicks": "342",
                "ctr": 0.0342,
                "costMicros": "1500000",
                "conversions": 12.0,
                "conversionsValue": 640.5,
                "averageCpc": "440000",
            }
        }
    ]
}

ADS_CAMPAIGNS = {
    "results": [
        {
            "campaign": {"resourceName": "customers/1/campaigns/9", "id": "9", "name": "Spring", "status": "ENABLED"},
            "metrics": {
                "impressions": "8000",
                "clicks": "300",
                "ctr": 0.0375,
                "costMicros": "1250000",
                "conversions": 10.0,
                "conversionsValue": 500.0,
            },
        }
    ]
}


# ── Metricool ──


def metricool_route(request: httpx.Request) -> str:
    path = request.url.path
    if path.endswith("/admin/simpleProfiles"):
        return "profile"
    if path.endswith("/statistics/summary"):
        return "stats"
    if path.endswith("/posts/list"):
        return "posts"
    return "unknown"


class FakeIdentity:
    """IdentityProvider stand-in."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.payload = payload or {}
        self.error = error
        self.calls: List[str] = []

    async def get_token_payload(self, token: str) -> Dict[str, Any]:
        self.calls.append(token)
        if self.error:
            raise self.error
        return self.payload


# ── Aggregator wiring ──


def make_aggregator(identity=None, ga4=None, ads=None, social=None, table=None):
    """Aggregator over fake providers. Returns it with the three fakes."""
    from app.connectors.ga4.adapter import GA4Adapter
    from app.connectors.google_ads.adapter import GoogleAdsAdapter
    from app.connectors.metricool.adapter import MetricoolAdapter
    from app.models.accounts import Provider
    from app.services.aggregator import MetricsAggregator
    from app.tenancy.accounts import ART_UNLIMITED, AccountMapper
    from app.tenancy.resolver import TenantResolver

    ga4 = ga4 or FakeProvider(ga4_route, ga4_replies())
    ads = ads or FakeProvider(ads_route, {"account": ADS_ACCOUNT, "campaigns": ADS_CAMPAIGNS})
    social = social or FakeProvider(metricool_route, {"profile": {}, "stats": {}, "posts": []})
    aggregator = MetricsAggregator(
        resolver=TenantResolver(identity or FakeIdentity({"companyId": ART_UNLIMITED})),
        accounts=AccountMapper(table),
        adapters={
            Provider.GA4: GA4Adapter(transport=ga4.transport),
            Provider.GOOGLE_ADS: GoogleAdsAdapter(transport=ads.transport),
            Provider.METRICOOL: MetricoolAdapter(transport=social.transport),
        },
        clock=lambda: REFERENCE,
    )
    return aggregator, ga4, ads, social
