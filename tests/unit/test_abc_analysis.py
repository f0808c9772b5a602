"""Tests for ABC classification and the cached report."""

import pytest

from intellecty.application.services.abc_analysis_service import (
    AbcAnalysisService,
    build_report,
    classify_abc,
)
from intellecty.core.config import get_settings
from intellecty.domain.entities.product import ALL_PRODUCTS, filter_products
from intellecty.domain.enums import AbcClass
from intellecty.infrastructure.cache import CacheStrategies, TenantCache


def test_classification_is_sorted_by_value_and_cumulative() -> None:
    classified = classify_abc(list(ALL_PRODUCTS))
    values = [p.value for p in classified]
    assert values == sorted(values, reverse=True)
    cumulative = [p.cumulative_percentage for p in classified]
    assert cumulative == sorted(cumulative)
    assert cumulative[-1] == pytest.approx(100.0)


def test_class_thresholds() -> None:
    for product in classify_abc(list(ALL_PRODUCTS)):
        if product.cumulative_percentage <= 80:
            assert product.abc_class is AbcClass.A
        elif product.cumulative_percentage <= 95:
            assert product.abc_class is AbcClass.B
        else:
            assert product.abc_class is AbcClass.C


def test_report_totals_and_percentages() -> None:
    report = build_report(list(ALL_PRODUCTS))
    assert report.analysis.total_products == 16
    total = sum(p.stock_value for p in ALL_PRODUCTS)
    assert report.analysis.total_value == pytest.approx(total)
    assert sum(c.count for c in report.categories.values()) == 16
    assert (
        report.analysis.category_a_percentage
        + report.analysis.category_b_percentage
        + report.analysis.category_c_percentage
    ) == pytest.approx(100.0)
    assert report.categories[AbcClass.A].recommendations[0].priority == "Critical"
    assert len(report.insights) == 5


def test_report_for_empty_selection() -> None:
    report = build_report(filter_products(category="does-not-exist"))
    assert report.analysis.total_products == 0
    assert report.analysis.category_a_percentage == 0
    assert all(c.count == 0 for c in report.categories.values())


async def test_report_is_cached_per_tenant_and_filter(cache: TenantCache, fake_redis) -> None:
    service = AbcAnalysisService(CacheStrategies(cache), get_settings())
    first = await service.get_report("acme-growth", vertical="INDUSTRIAL")
    second = await service.get_report("acme-growth", vertical="industrial")
    assert first == second
    assert first.analysis.total_products == 8
    keys = await fake_redis.keys("acme-growth:analytics:abc:*")
    assert len(keys) == 1
    await service.get_report("globex-premium", vertical="INDUSTRIAL")
    assert len(await fake_redis.keys("globex-premium:analytics:abc:*")) == 1
