"""Tests for economic impact scoring."""

from datetime import datetime, timedelta, timezone

import pytest

from intellecty.application.services import economic_service as econ
from intellecty.core.config import get_settings
from intellecty.infrastructure.cache import CacheStrategies, TenantCache


def test_gdp_impact_is_scaled_and_clamped() -> None:
    assert econ.gdp_impact(2.0, "food") == 0
    assert econ.gdp_impact(3.0, "luxury") == pytest.approx(0.75)
    assert econ.gdp_impact(10.0, "luxury") == 1.0
    assert econ.gdp_impact(-10.0, "bearings") == -1.0


def test_inflation_impact_scales_with_price_sensitivity() -> None:
    assert econ.inflation_impact(3.2, 0.5) == pytest.approx(-0.3)
    assert econ.inflation_impact(3.2, 0.0) == 0


def test_consumer_confidence_impact() -> None:
    assert econ.consumer_confidence_impact(85.5, "default") == pytest.approx(-0.29)
    assert econ.consumer_confidence_impact(0, "luxury") == -1.0


def test_commodity_impact_uses_relevant_symbols() -> None:
    data = econ.reference_economic_data("US")
    # default category: WTI (+1.6%) and GOLD (-0.3%)
    assert econ.commodity_impact(data.commodities, "bearings") == pytest.approx((0.016 - 0.003) / 2)
    # food tracks WHEAT, which is not quoted
    assert econ.commodity_impact(data.commodities, "food") == 0


def test_overall_impact_is_weighted_sum() -> None:
    data = econ.reference_economic_data("US")
    impact = econ.analyze_impact(data, "Clothing", 0.5)
    expected = (
        impact.gdp_impact * 0.25
        + impact.inflation_impact * 0.20
        + impact.consumer_confidence_impact * 0.25
        + impact.retail_sales_impact * 0.20
        + impact.commodity_impact * 0.10
    )
    assert impact.overall_impact == pytest.approx(expected)
    assert impact.confidence == pytest.approx(0.8, abs=0.01)


def test_confidence_decreases_with_age_and_gaps() -> None:
    data = econ.reference_economic_data("US")
    later = datetime.now(timezone.utc) + timedelta(days=10)
    assert econ.data_confidence(data, now=later) == pytest.approx(0.5)

    sparse = data.model_copy(
        update={
            "indicators": data.indicators.model_copy(update={"gdp": None, "inflation": None}),
            "commodities": data.commodities[:1],
        }
    )
    assert econ.data_confidence(sparse) == pytest.approx(0.4, abs=0.01)


def test_confidence_floor() -> None:
    data = econ.reference_economic_data("US")
    empty = data.model_copy(
        update={
            "indicators": econ.EconomicIndicators(date=data.indicators.date),
            "commodities": [],
        }
    )
    assert econ.data_confidence(empty) == 0.1


async def test_indicators_are_cached_globally(cache: TenantCache, fake_redis) -> None:
    service = econ.EconomicService(CacheStrategies(cache), get_settings())
    first = await service.get_indicators("us")
    second = await service.get_indicators("US")
    assert first == second
    assert first.country == "US"
    assert len(await fake_redis.keys("global:api:economic:*")) == 1
