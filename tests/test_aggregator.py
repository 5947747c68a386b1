"""Tests for the aggregation facade (end-to-end with faked providers)."""

import asyncio

import pytest

from app.connectors.base import ProviderAdapter
from app.core.errors import AuthenticationError, ErrorKind
from app.models.accounts import Provider
from app.models.results import DateRange, Failure, NotConfigured, Success
from app.tenancy.accounts import ART_UNLIMITED, STATIC_ACCOUNTS
from conftest import FakeIdentity, FakeProvider, error_response, ga4_replies, ga4_route, make_aggregator


async def test_ga4_last_seven_days(configured):
    aggregator, ga4, _, _ = make_aggregator()
    result = await aggregator.get_metrics("tok", Provider.GA4, "7daysAgo", "today")

    assert isinstance(result, Success)
    record = result.record
    assert record.tenant_id == ART_UNLIMITED
    assert record.account_id == "270323387"
    assert record.date_range == DateRange(start_date="2024-03-08", end_date="2024-03-15")
    assert record.metrics["activeUsers"] == 120
    assert len(ga4.requests) == 6


@pytest.mark.parametrize("provider", list(Provider))
async def test_missing_token_queries_nothing(configured, provider):
    identity = FakeIdentity({"companyId": ART_UNLIMITED})
    aggregator, ga4, ads, social = make_aggregator(identity=identity)

    with pytest.raises(AuthenticationError):
        await aggregator.get_metrics(None, provider)

    assert identity.calls == []
    assert ga4.requests == ads.requests == social.requests == []


async def test_unresolvable_token_uses_default_tenant(configured):
    aggregator, _, _, _ = make_aggregator(identity=FakeIdentity(error=RuntimeError("down")))
    result = await aggregator.get_metrics("tok", Provider.METRICOOL)

    assert isinstance(result, Success)
    assert result.record.tenant_id == "default"
    assert result.record.account_id == "1920806"


async def test_default_range_is_last_thirty_days(configured):
    aggregator, _, _, _ = make_aggregator()
    result = await aggregator.get_metrics("tok", Provider.GA4)
    assert result.record.date_range == DateRange(start_date="2024-02-14", end_date="2024-03-15")


async def test_reversed_range_fails_before_any_query(configured):
    aggregator, ga4, _, _ = make_aggregator()
    result = await aggregator.get_metrics("tok", Provider.GA4, "today", "7daysAgo")

    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.QUERY_ERROR
    assert ga4.requests == []


async def test_one_panel_failing_leaves_others_intact(configured):
    ga4 = FakeProvider(ga4_route, ga4_replies(totals=error_response(500)))
    aggregator, _, _, _ = make_aggregator(ga4=ga4)

    results = await asyncio.gather(
        aggregator.get_metrics("tok", Provider.GA4),
        aggregator.get_metrics("tok", Provider.GOOGLE_ADS),
        aggregator.get_metrics("tok", Provider.METRICOOL),
    )
    assert isinstance(results[0], Failure)
    assert isinstance(results[1], Success)
    assert isinstance(results[2], Success)


async def test_tenant_without_ads_is_not_configured(configured):
    table = dict(STATIC_ACCOUNTS)
    table[(ART_UNLIMITED, Provider.GOOGLE_ADS)] = table[(ART_UNLIMITED, Provider.GOOGLE_ADS)].model_copy(
        update={"has_advertising_account": False}
    )
    aggregator, _, ads, _ = make_aggregator(table=table)

    result = await aggregator.get_metrics("tok", Provider.GOOGLE_ADS)
    assert isinstance(result, NotConfigured)
    assert ads.requests == []


class SlowAdapter(ProviderAdapter):
    provider = Provider.GA4

    def required_settings(self):
        return {}

    async def collect(self, tenant_id, account, date_range):
        await asyncio.sleep(5)


async def test_caller_timeout_maps_to_query_error():
    aggregator, _, _, _ = make_aggregator()
    aggregator.adapters[Provider.GA4] = SlowAdapter()

    result = await aggregator.get_metrics("tok", Provider.GA4, timeout=0.01)
    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.QUERY_ERROR
    assert "timed out" in result.details
