"""Inventory health overview and replenishment recommendations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from intellecty.core.constants import AVG_DAILY_DEMAND
from intellecty.domain.entities.product import Product, filter_products, find_product
from intellecty.domain.enums import StockStatus
from intellecty.domain.exceptions import ResourceNotFoundException, ValidationException
from intellecty.schemas.inventory import (
    InventoryItem,
    InventoryOverview,
    InventorySummary,
    OptimizationResult,
    OptimizeRequest,
)

logger = logging.getLogger(__name__)

# Reorder point covers lead-time demand plus 20%; safety stock covers a week.
REORDER_POINT_BUFFER = 1.2
SAFETY_STOCK_DAYS = 7
ORDER_COVER_DAYS = 30
MAX_WASTE_PERCENT = 10.0
MAX_CARBON_REDUCTION_PERCENT = 20.0


def stock_status(stock: int, product: Product) -> StockStatus:
    """Classify stock against the product's safety stock and reorder point."""
    if stock <= product.safety_stock:
        return StockStatus.CRITICAL
    if stock <= product.reorder_point:
        return StockStatus.LOW
    return StockStatus.HEALTHY


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class InventoryService:
    """Stateless inventory computations over the product catalog."""

    def __init__(self, avg_daily_demand: int = AVG_DAILY_DEMAND) -> None:
        self.avg_daily_demand = avg_daily_demand

    def overview(
        self,
        vertical: str | None = None,
        category: str | None = None,
    ) -> InventoryOverview:
        """Stock status for every product matching the filters, with totals."""
        now = _now_iso()
        items = [
            InventoryItem(
                product_id=p.id,
                product_name=p.name,
                sku=p.sku,
                category=p.category,
                vertical=p.vertical,
                current_stock=p.current_stock,
                reorder_point=p.reorder_point,
                safety_stock=p.safety_stock,
                lead_time=p.lead_time,
                status=stock_status(p.current_stock, p),
                days_remaining=p.current_stock // self.avg_daily_demand,
                value=p.stock_value,
                cost=p.stock_cost,
                supplier=p.supplier,
                location=p.location,
                last_updated=now,
            )
            for p in filter_products(vertical=vertical, category=category)
        ]
        summary = InventorySummary(
            total_products=len(items),
            total_value=sum(i.value for i in items),
            total_cost=sum(i.cost for i in items),
            critical_items=sum(1 for i in items if i.status is StockStatus.CRITICAL),
            low_stock_items=sum(1 for i in items if i.status is StockStatus.LOW),
            healthy_items=sum(1 for i in items if i.status is StockStatus.HEALTHY),
        )
        return InventoryOverview(products=items, summary=summary)

    def optimize(self, request: OptimizeRequest) -> OptimizationResult:
        """Recommend reorder point, safety stock and order quantity for a product.

        Raises:
            ValidationException: productId missing.
            ResourceNotFoundException: productId not in the catalog.
        """
        if not request.product_id:
            raise ValidationException("Product ID is required", field="productId")
        product = find_product(request.product_id)
        if product is None:
            raise ResourceNotFoundException("product", request.product_id)

        demand = self.avg_daily_demand
        stock = product.current_stock if request.current_stock is None else request.current_stock
        reorder_point = round(demand * request.lead_time_days * REORDER_POINT_BUFFER)
        safety_stock = round(demand * SAFETY_STOCK_DAYS)
        order_quantity = round(
            max(0, reorder_point + safety_stock - stock + demand * ORDER_COVER_DAYS)
        )
        waste = self._waste_prediction(stock, request.horizon)
        logger.debug(
            "Optimized %s: rop=%s ss=%s order=%s", product.id, reorder_point, safety_stock, order_quantity
        )
        return OptimizationResult(
            product_id=product.id,
            product_name=product.name,
            product_category=product.category,
            current_stock=stock,
            lead_time_days=request.lead_time_days,
            horizon=request.horizon,
            optimal_reorder_point=reorder_point,
            optimal_safety_stock=safety_stock,
            recommended_order_quantity=order_quantity,
            waste_prediction=waste,
            carbon_footprint_reduction=round(
                min(MAX_CARBON_REDUCTION_PERCENT, waste * 2), 2
            ),
            generated_at=_now_iso(),
        )

    def _waste_prediction(self, stock: int, horizon: int) -> float:
        """Percent of stock left unsold after horizon days, capped at MAX_WASTE_PERCENT."""
        if stock <= 0:
            return 0.0
        overstock = max(0, stock - self.avg_daily_demand * horizon)
        return round(overstock / stock * MAX_WASTE_PERCENT, 2)
