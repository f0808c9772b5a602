"""Tests for stock status classification and replenishment recommendations."""

import pytest

from intellecty.application.services.inventory_service import InventoryService, stock_status
from intellecty.domain.entities.product import find_product
from intellecty.domain.enums import StockStatus
from intellecty.domain.exceptions import ResourceNotFoundException, ValidationException
from intellecty.schemas.inventory import OptimizeRequest


@pytest.mark.parametrize(
    ("stock", "expected"),
    [(0, StockStatus.CRITICAL), (25, StockStatus.CRITICAL), (26, StockStatus.LOW),
     (50, StockStatus.LOW), (51, StockStatus.HEALTHY)],
)
def test_stock_status_boundaries(stock: int, expected: StockStatus) -> None:
    product = find_product("IND-001")  # safety 25, reorder 50
    assert stock_status(stock, product) is expected


def test_overview_covers_catalog_with_summary() -> None:
    overview = InventoryService().overview()
    assert overview.summary.total_products == 16
    assert (
        overview.summary.critical_items + overview.summary.low_stock_items + overview.summary.healthy_items
        == 16
    )
    first = overview.products[0]
    assert first.product_id == "IND-001"
    assert first.days_remaining == 125 // 5
    assert first.value == pytest.approx(125 * 45.50)


def test_overview_filters() -> None:
    service = InventoryService()
    apparel = service.overview(vertical="apparel")
    assert {p.vertical.value for p in apparel.products} == {"APPAREL"}
    accessories = service.overview(category="ACCESS")
    assert [p.product_id for p in accessories.products] == ["APP-005", "APP-006", "APP-008"]


def test_optimize_formulas() -> None:
    result = InventoryService().optimize(
        OptimizeRequest(product_id="IND-001", current_stock=40, lead_time_days=10, horizon=30)
    )
    assert result.optimal_reorder_point == 60  # 5 * 10 * 1.2
    assert result.optimal_safety_stock == 35
    assert result.recommended_order_quantity == 60 + 35 - 40 + 150
    assert result.waste_prediction == 0  # 40 units < 150 units of demand


def test_optimize_defaults_to_catalog_stock() -> None:
    result = InventoryService().optimize(OptimizeRequest(product_id="APP-008"))
    assert result.current_stock == 200
    assert result.lead_time_days == 14
    assert result.recommended_order_quantity == 84 + 35 - 200 + 150


def test_optimize_keeps_explicit_zero_stock() -> None:
    result = InventoryService().optimize(OptimizeRequest(product_id="APP-008", current_stock=0))
    assert result.current_stock == 0
    assert result.waste_prediction == 0


def test_optimize_order_quantity_never_negative() -> None:
    result = InventoryService().optimize(OptimizeRequest(product_id="IND-005", current_stock=10_000))
    assert result.recommended_order_quantity == 0
    assert 0 < result.waste_prediction <= 10
    assert result.carbon_footprint_reduction == pytest.approx(min(20, result.waste_prediction * 2))


def test_optimize_is_deterministic() -> None:
    request = OptimizeRequest(product_id="IND-005", current_stock=500, horizon=60)
    first = InventoryService().optimize(request)
    second = InventoryService().optimize(request)
    assert first.waste_prediction == second.waste_prediction


def test_optimize_requires_product_id() -> None:
    with pytest.raises(ValidationException) as exc_info:
        InventoryService().optimize(OptimizeRequest())
    assert exc_info.value.message == "Product ID is required"


def test_optimize_unknown_product() -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        InventoryService().optimize(OptimizeRequest(product_id="NOPE-1"))
    assert exc_info.value.message == "Product not found"
