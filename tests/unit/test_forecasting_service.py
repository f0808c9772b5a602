"""Tests for forecast generation, caching and history."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from intellecty.application.services.economic_service import EconomicService
from intellecty.application.services.forecasting_service import (
    ForecastingService,
    build_forecast,
    model_mape,
    point_confidence,
)
from intellecty.core.config import get_settings
from intellecty.domain.entities.product import find_product
from intellecty.domain.entities.tenant import find_tenant
from intellecty.domain.exceptions import (
    ResourceNotFoundException,
    TierLimitExceededException,
    ValidationException,
)
from intellecty.infrastructure.cache import CacheStrategies, TenantCache, forecast_key, lock_key
from intellecty.schemas.forecasting import ForecastRequest

NOW = datetime(2024, 7, 1, 15, 30, tzinfo=timezone.utc)  # a Monday
DEMO = find_tenant("demo-tenant")
ACME = find_tenant("acme-growth")
GLOBEX = find_tenant("globex-premium")


def _service(cache) -> ForecastingService:
    settings = get_settings()
    return ForecastingService(cache, EconomicService(CacheStrategies(cache), settings), settings)


def test_point_confidence_decays_to_floor() -> None:
    assert point_confidence(0, 30) == pytest.approx(0.95)
    assert point_confidence(15, 30) == pytest.approx(0.85)
    assert point_confidence(29, 30) >= 0.7
    assert point_confidence(30, 30) == pytest.approx(0.75)
    assert point_confidence(50, 30) == 0.7


def test_model_mape_is_stable_and_bounded() -> None:
    assert model_mape("IND-001") == model_mape("IND-001")
    assert all(5 <= model_mape(f"P-{i}") < 10 for i in range(50))


def test_build_forecast_shape_and_intervals() -> None:
    product = find_product("IND-001")
    result = build_forecast(product, 14, now=NOW)
    assert len(result.forecast) == 14
    assert result.forecast[0].date.startswith("2024-07-01T00:00:00")
    assert result.forecast[13].date.startswith("2024-07-14")
    for i, point in enumerate(result.forecast):
        low, high = point.confidence_interval
        assert 0 < low < high
        assert high == pytest.approx(low / 0.85 * 1.15, abs=0.02)
        assert point.confidence == pytest.approx(point_confidence(i, 14))
    assert result.accuracy == pytest.approx(100 - result.mape, abs=0.01)


def test_build_forecast_follows_weekly_pattern() -> None:
    industrial = build_forecast(find_product("IND-005"), 7, now=NOW)  # 100/7 units per day
    quantities = [p.quantity for p in industrial.forecast]
    assert quantities[0] > quantities[5]  # Monday busier than Saturday
    apparel = build_forecast(find_product("APP-008"), 7, now=NOW)  # 100/14 units per day
    quantities = [p.quantity for p in apparel.forecast]
    assert quantities[5] > quantities[0]  # Saturday busier than Monday


def test_build_forecast_is_deterministic() -> None:
    product = find_product("APP-003")
    assert build_forecast(product, 30, now=NOW) == build_forecast(product, 30, now=NOW)


async def test_generate_caches_per_tenant_product_horizon(cache: TenantCache, fake_redis) -> None:
    service = _service(cache)
    request = ForecastRequest(product_id="IND-002", horizon=10, include_external_factors=False)
    first = await service.generate(ACME, request)
    key = forecast_key("acme-growth", "IND-002", 10)
    assert await fake_redis.exists(key) == 1
    assert await fake_redis.exists(lock_key(key)) == 0
    second = await service.generate(ACME, request)
    assert second.generated_at == first.generated_at
    assert second == first


async def test_generate_with_external_factors(cache: TenantCache) -> None:
    result = await _service(cache).generate(
        DEMO, ForecastRequest(product_id="APP-001", horizon=5)
    )
    assert result.external_factors is not None
    assert result.external_factors.economic.country == "US"
    assert all(p.factors == ["economic"] for p in result.forecast)


async def test_generate_when_lock_is_held_returns_unstored_forecast(
    cache: TenantCache, fake_redis
) -> None:
    key = forecast_key("globex-premium", "IND-003", 30)
    await fake_redis.set(lock_key(key), "other-writer", px=5000)
    result = await _service(cache).generate(
        GLOBEX, ForecastRequest(product_id="IND-003", include_external_factors=False)
    )
    assert result.product_id == "IND-003"
    assert await fake_redis.exists(key) == 0


async def test_generate_without_cache(offline_cache: TenantCache) -> None:
    result = await _service(offline_cache).generate(
        DEMO, ForecastRequest(product_id="IND-004", horizon=3)
    )
    assert len(result.forecast) == 3


async def test_generate_validation(cache: TenantCache) -> None:
    service = _service(cache)
    with pytest.raises(ValidationException):
        await service.generate(DEMO, ForecastRequest())
    with pytest.raises(ResourceNotFoundException):
        await service.generate(DEMO, ForecastRequest(product_id="IND-999"))


async def test_history_batches_reads_and_writes() -> None:
    cache = MagicMock()
    cache.is_available.return_value = True
    cached = build_forecast(find_product("IND-002"), 30).to_cache()
    cache.get_many = AsyncMock(return_value=[None, cached, None])
    cache.set_many = AsyncMock()

    history = await _service(cache).history("acme-growth", limit=3)

    assert [h.product_id for h in history] == ["IND-001", "IND-002", "IND-003"]
    cache.get_many.assert_awaited_once_with(
        [forecast_key("acme-growth", p, 30) for p in ("IND-001", "IND-002", "IND-003")]
    )
    stored, ttl = cache.set_many.await_args.args
    assert set(stored) == {
        forecast_key("acme-growth", "IND-001", 30),
        forecast_key("acme-growth", "IND-003", 30),
    }
    assert ttl == get_settings().cache_ttl_forecast


async def test_history_caps_at_ten_products(cache: TenantCache) -> None:
    history = await _service(cache).history("demo-tenant", limit=50)
    assert len(history) == 10
    assert history[0].product.name == find_product("IND-001").name


async def test_history_for_one_product(cache: TenantCache) -> None:
    history = await _service(cache).history("demo-tenant", product_id="APP-002")
    assert len(history) == 1
    assert history[0].id == "forecast-APP-002-30"
    with pytest.raises(ResourceNotFoundException):
        await _service(cache).history("demo-tenant", product_id="nope")


@pytest.mark.parametrize(
    ("tenant_id", "allowed_days", "denied_days"),
    [("demo-tenant", 7, 8), ("acme-growth", 30, 31), ("globex-premium", 365, None)],
)
async def test_generate_enforces_tier_forecast_horizon(
    cache: TenantCache, tenant_id: str, allowed_days: int, denied_days: int | None
) -> None:
    tenant = find_tenant(tenant_id)
    service = _service(cache)
    result = await service.generate(
        tenant,
        ForecastRequest(product_id="IND-001", horizon=allowed_days, include_external_factors=False),
    )
    assert len(result.forecast) == allowed_days
    if denied_days is None:
        return
    with pytest.raises(TierLimitExceededException) as exc_info:
        await service.generate(
            tenant, ForecastRequest(product_id="IND-001", horizon=denied_days)
        )
    assert exc_info.value.details == {
        "limit": "forecast_days",
        "requested": denied_days,
        "allowed": allowed_days,
    }


async def test_generate_recomputes_when_cached_forecast_is_malformed(
    cache: TenantCache,
) -> None:
    key = forecast_key("acme-growth", "IND-001", 30)
    await cache.set(key, {"legacy": True}, ttl=60)

    result = await _service(cache).generate(
        ACME, ForecastRequest(product_id="IND-001", include_external_factors=False)
    )

    assert result.product_id == "IND-001"
    assert len(result.forecast) == 30
    assert (await cache.get(key))["productId"] == "IND-001"


async def test_history_recomputes_malformed_entries(cache: TenantCache) -> None:
    key = forecast_key("acme-growth", "IND-002", 30)
    await cache.set(key, {"forecast": "not-a-list"}, ttl=60)

    history = await _service(cache).history("acme-growth", product_id="IND-002")

    assert [h.product_id for h in history] == ["IND-002"]
    assert (await cache.get(key))["productId"] == "IND-002"
