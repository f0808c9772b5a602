"""Tests for tier feature access and quota checks."""

import pytest

from intellecty.application.services.tier_gating_service import LimitCheck, TierGatingService
from intellecty.domain.entities.tenant import find_tenant
from intellecty.domain.exceptions import FeatureNotAvailableException, TierLimitExceededException

gating = TierGatingService()


@pytest.mark.parametrize(
    ("tenant_id", "feature", "expected"),
    [
        ("demo-tenant", "basic_forecasting", True),
        ("demo-tenant", "advanced_analytics", False),
        ("acme-growth", "advanced_analytics", True),
        ("acme-growth", "custom_ai_models", False),
        ("globex-premium", "custom_ai_models", True),
    ],
)
def test_check_feature_access(tenant_id: str, feature: str, expected: bool) -> None:
    assert gating.check_feature_access(find_tenant(tenant_id), feature) is expected


@pytest.mark.parametrize(
    ("tenant_id", "days", "expected"),
    [
        ("demo-tenant", 7, LimitCheck(True, 7, 7)),
        ("demo-tenant", 30, LimitCheck(False, 30, 7)),
        ("acme-growth", 30, LimitCheck(True, 30, 30)),
        ("acme-growth", 90, LimitCheck(False, 90, 30)),
        ("globex-premium", 365, LimitCheck(True, 365, 365)),
    ],
)
def test_check_forecast_limit(tenant_id: str, days: int, expected: LimitCheck) -> None:
    assert gating.check_forecast_limit(find_tenant(tenant_id), days) == expected


def test_check_sku_and_user_limits() -> None:
    demo = find_tenant("demo-tenant")
    premium = find_tenant("globex-premium")
    assert gating.check_sku_limit(demo).allowed is True
    assert gating.check_sku_limit(demo, 100) == LimitCheck(False, 100, 100)
    assert gating.check_sku_limit(premium, 10**6) == LimitCheck(True, 10**6, -1)
    assert gating.check_user_limit(demo, 1).allowed is False
    assert gating.check_user_limit(find_tenant("acme-growth"), 4).allowed is True


def test_require_feature_raises_for_missing_feature() -> None:
    with pytest.raises(FeatureNotAvailableException) as exc_info:
        gating.require_feature(find_tenant("demo-tenant"), "api_access")
    assert exc_info.value.error_code == "FEATURE_NOT_AVAILABLE"
    assert exc_info.value.message == "Feature 'api_access' not available in FREE tier"


def test_require_forecast_horizon() -> None:
    gating.require_forecast_horizon(find_tenant("acme-growth"), 30)
    with pytest.raises(TierLimitExceededException) as exc_info:
        gating.require_forecast_horizon(find_tenant("acme-growth"), 31)
    assert exc_info.value.error_code == "TIER_LIMIT_EXCEEDED"
    assert "Requested: 31 days, Limit: 30 days" in exc_info.value.message
