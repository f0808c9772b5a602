"""ABC inventory classification.

Products are ranked by inventory value (price x quantity). Walking the
ranking, a product whose cumulative share of total value is at most 80%
is class A, at most 95% class B, otherwise class C.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from intellecty.core.config import Settings
from intellecty.domain.entities.product import Product, filter_products
from intellecty.domain.enums import AbcClass
from intellecty.infrastructure.cache import CacheStrategies, analytics_key
from intellecty.infrastructure.cache.keys import canonical_digest
from intellecty.schemas.analytics import (
    AbcCategory,
    AbcProduct,
    AbcRecommendation,
    AbcReport,
    AbcSummary,
)

logger = logging.getLogger(__name__)

CLASS_A_THRESHOLD = 80.0
CLASS_B_THRESHOLD = 95.0

RECOMMENDATIONS: dict[AbcClass, AbcRecommendation] = {
    AbcClass.A: AbcRecommendation(
        category=AbcClass.A,
        title="High-Value Items Management",
        description="Implement strict inventory control and frequent monitoring for Category A products",
        impact="High",
        priority="Critical",
    ),
    AbcClass.B: AbcRecommendation(
        category=AbcClass.B,
        title="Balanced Approach",
        description="Use moderate inventory control with regular reviews for Category B products",
        impact="Medium",
        priority="Important",
    ),
    AbcClass.C: AbcRecommendation(
        category=AbcClass.C,
        title="Cost-Effective Management",
        description=(
            "Use simple inventory control methods and consider reducing safety stock "
            "for Category C products"
        ),
        impact="Low",
        priority="Standard",
    ),
}


def _class_for(cumulative_percentage: float) -> AbcClass:
    if cumulative_percentage <= CLASS_A_THRESHOLD:
        return AbcClass.A
    if cumulative_percentage <= CLASS_B_THRESHOLD:
        return AbcClass.B
    return AbcClass.C


def classify_abc(products: list[Product]) -> list[AbcProduct]:
    """Rank products by value (descending) and assign ABC classes.

    Ties keep catalog order. When total value is zero every product is
    class C with a cumulative percentage of 0.
    """
    ranked = sorted(products, key=lambda p: p.stock_value, reverse=True)
    total = sum(p.stock_value for p in ranked)
    cumulative = 0.0
    classified: list[AbcProduct] = []
    for p in ranked:
        cumulative += p.stock_value
        percentage = (cumulative / total * 100) if total > 0 else 0.0
        classified.append(
            AbcProduct(
                id=p.id,
                name=p.name,
                sku=p.sku,
                category=p.category,
                vertical=p.vertical,
                quantity=p.current_stock,
                price=p.price,
                value=p.stock_value,
                cost=p.stock_cost,
                abc_class=_class_for(percentage) if total > 0 else AbcClass.C,
                cumulative_percentage=percentage,
            )
        )
    return classified


def build_report(products: list[Product]) -> AbcReport:
    """Classify products and assemble totals, per-class breakdown and insights."""
    classified = classify_abc(products)
    total_value = sum(p.value for p in classified)
    total_cost = sum(p.cost for p in classified)

    categories: dict[AbcClass, AbcCategory] = {}
    for abc_class in AbcClass:
        members = [p for p in classified if p.abc_class is abc_class]
        class_value = sum(p.value for p in members)
        categories[abc_class] = AbcCategory(
            products=members,
            count=len(members),
            percentage=(class_value / total_value * 100) if total_value > 0 else 0.0,
            total_value=class_value,
            recommendations=[RECOMMENDATIONS[abc_class]],
        )

    insights = [
        f"Category {c.value} products ({categories[c].count} items) represent "
        f"{categories[c].percentage:.1f}% of total inventory value"
        for c in AbcClass
    ]
    insights.append("Focus on Category A products for maximum impact on inventory optimization")
    insights.append("Consider reducing safety stock for Category C products to free up capital")

    return AbcReport(
        analysis=AbcSummary(
            total_products=len(classified),
            total_value=total_value,
            total_cost=total_cost,
            category_a_percentage=categories[AbcClass.A].percentage,
            category_b_percentage=categories[AbcClass.B].percentage,
            category_c_percentage=categories[AbcClass.C].percentage,
        ),
        categories=categories,
        insights=insights,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


class AbcAnalysisService:
    """ABC reports per tenant and filter, cached with cache-aside."""

    def __init__(self, strategies: CacheStrategies, settings: Settings) -> None:
        self.strategies = strategies
        self.ttl = settings.cache_ttl_analytics

    async def get_report(
        self,
        tenant_id: str,
        vertical: str | None = None,
        category: str | None = None,
    ) -> AbcReport:
        """Return the ABC report for the filtered catalog (cached per tenant and filter)."""
        filters = {"vertical": (vertical or "").upper(), "category": (category or "").lower()}
        key = analytics_key(tenant_id, "abc", canonical_digest(filters))

        async def produce() -> dict:
            logger.info("Generating ABC analysis for tenant %s (%s)", tenant_id, filters)
            products = filter_products(vertical=vertical, category=category)
            return build_report(products).to_cache()

        return await self.strategies.cache_aside(
            key, produce, self.ttl, validate=AbcReport.model_validate
        )
