"""Tests for metric definitions and unit conversions."""

from app.core.metric_registry import (
    GA4_METRICS,
    GOOGLE_ADS_CAMPAIGN_METRICS,
    GOOGLE_ADS_METRICS,
    micros_to_currency,
    safe_int,
    to_percent_string,
)


def test_micros_to_currency():
    assert micros_to_currency(1_500_000) == 1.50
    assert micros_to_currency("1500000") == 1.5
    assert micros_to_currency(None) == 0.0


def test_fraction_to_percent_string():
    assert to_percent_string(0.0342) == "3.42"
    assert to_percent_string("0.5") == "50.00"
    assert to_percent_string(None) == "0.00"


def test_safe_int_handles_numeric_strings():
    assert safe_int("120") == 120
    assert safe_int("95.7") == 95
    assert safe_int("n/a") == 0


def test_cost_definition_reads_micros_field():
    cost = GOOGLE_ADS_METRICS["cost"]
    assert cost.source_field == "costMicros"
    assert cost.convert("1500000") == 1.5


def test_campaign_metrics_exclude_average_cpc():
    assert "averageCpc" not in GOOGLE_ADS_CAMPAIGN_METRICS
    assert "cost" in GOOGLE_ADS_CAMPAIGN_METRICS


def test_definition_describes_itself_for_the_catalog():
    assert GA4_METRICS["avgSessionDuration"].describe() == {
        "name": "avgSessionDuration",
        "type": "duration",
        "unit": "s",
        "description": "Average session length",
    }
    assert GOOGLE_ADS_METRICS["ctr"].describe()["unit"] == "%"
