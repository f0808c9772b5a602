"""Economic indicators and their estimated effect on retail demand.

Indicator values are the published reference figures; no upstream economic
API is queried. Impact scores follow per-category sensitivities and are
clamped to [-1, 1] except inflation and commodity impacts, which are
unbounded linear terms.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from intellecty.core.config import Settings
from intellecty.infrastructure.cache import CacheStrategies, external_api_key
from intellecty.infrastructure.cache.keys import canonical_digest
from intellecty.schemas.external import (
    Commodity,
    EconomicData,
    EconomicImpact,
    EconomicIndicators,
)

logger = logging.getLogger(__name__)

GDP_SENSITIVITY = {
    "luxury": 1.5,
    "electronics": 1.2,
    "automotive": 1.3,
    "clothing": 1.0,
    "food": 0.8,
    "utilities": 0.5,
}
CONFIDENCE_SENSITIVITY = {
    "luxury": 1.8,
    "electronics": 1.3,
    "automotive": 1.5,
    "clothing": 1.1,
    "food": 0.7,
    "utilities": 0.3,
}
RETAIL_SALES_SENSITIVITY = {
    "clothing": 1.2,
    "electronics": 1.1,
    "food": 0.9,
    "automotive": 1.3,
    "luxury": 1.4,
}
CATEGORY_COMMODITIES = {
    "automotive": ("WTI", "COPPER"),
    "electronics": ("GOLD", "SILVER", "COPPER"),
    "food": ("WHEAT",),
    "clothing": ("WTI",),
}
DEFAULT_COMMODITIES = ("WTI", "GOLD")

IMPACT_WEIGHTS = {
    "gdp": 0.25,
    "inflation": 0.20,
    "consumer_confidence": 0.25,
    "retail_sales": 0.20,
    "commodity": 0.10,
}

BASE_CONFIDENCE = 0.8
MIN_CONFIDENCE = 0.1


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))


def reference_economic_data(country: str) -> EconomicData:
    """Reference indicator and commodity figures, stamped with the current time."""
    now = datetime.now(timezone.utc).isoformat()
    return EconomicData(
        indicators=EconomicIndicators(
            date=now,
            gdp=2.5,
            inflation=3.2,
            unemployment=4.1,
            consumer_confidence=85.5,
            retail_sales=2.8,
            manufacturing_pmi=52.3,
            interest_rate=5.25,
            exchange_rate=1.0,
        ),
        commodities=[
            Commodity(symbol="WTI", name="West Texas Intermediate Oil", price=75.50,
                      change=1.2, change_percent=1.6, date=now),
            Commodity(symbol="GOLD", name="Gold", price=1950.25,
                      change=-5.75, change_percent=-0.3, date=now),
            Commodity(symbol="SILVER", name="Silver", price=24.80,
                      change=0.15, change_percent=0.6, date=now),
        ],
        country=country,
        fetched_at=now,
    )


def gdp_impact(gdp: float, category: str) -> float:
    return _clamp((gdp - 2.0) / 2.0 * GDP_SENSITIVITY.get(category, 1.0))


def inflation_impact(inflation: float, price_sensitivity: float) -> float:
    # Above 2% inflation dampens discretionary demand.
    return -(inflation - 2.0) / 2.0 * price_sensitivity


def consumer_confidence_impact(confidence: float, category: str) -> float:
    return _clamp((confidence - 100) / 50 * CONFIDENCE_SENSITIVITY.get(category, 1.0))


def retail_sales_impact(retail_sales: float, category: str) -> float:
    return _clamp((retail_sales - 2.0) / 2.0 * RETAIL_SALES_SENSITIVITY.get(category, 1.0))


def commodity_impact(commodities: list[Commodity], category: str) -> float:
    """Mean percent change (as a fraction) of the commodities relevant to category."""
    relevant = CATEGORY_COMMODITIES.get(category, DEFAULT_COMMODITIES)
    changes = [c.change_percent / 100 for c in commodities if c.symbol in relevant]
    return sum(changes) / len(changes) if changes else 0.0


def data_confidence(data: EconomicData, now: datetime | None = None) -> float:
    """Confidence in the data: lower when stale, incomplete or thin on commodities."""
    now = now or datetime.now(timezone.utc)
    confidence = BASE_CONFIDENCE
    fetched = datetime.fromisoformat(data.fetched_at)
    age_hours = max(0.0, (now - fetched).total_seconds() / 3600)
    confidence -= min(0.3, age_hours / 24 * 0.1)
    missing = sum(
        1 for name, value in data.indicators.model_dump().items() if name != "date" and value is None
    )
    confidence -= missing * 0.1
    if len(data.commodities) < 3:
        confidence -= 0.2
    return max(MIN_CONFIDENCE, confidence)


def analyze_impact(
    data: EconomicData,
    category: str,
    price_sensitivity: float = 0.5,
) -> EconomicImpact:
    """Score how current economic conditions shift demand for a product category.

    Missing indicators contribute a neutral score of 0 and lower confidence.
    """
    category = category.lower()
    ind = data.indicators
    gdp = gdp_impact(ind.gdp, category) if ind.gdp is not None else 0.0
    inflation = (
        inflation_impact(ind.inflation, price_sensitivity) if ind.inflation is not None else 0.0
    )
    confidence_score = (
        consumer_confidence_impact(ind.consumer_confidence, category)
        if ind.consumer_confidence is not None
        else 0.0
    )
    retail = retail_sales_impact(ind.retail_sales, category) if ind.retail_sales is not None else 0.0
    commodity = commodity_impact(data.commodities, category)
    overall = (
        gdp * IMPACT_WEIGHTS["gdp"]
        + inflation * IMPACT_WEIGHTS["inflation"]
        + confidence_score * IMPACT_WEIGHTS["consumer_confidence"]
        + retail * IMPACT_WEIGHTS["retail_sales"]
        + commodity * IMPACT_WEIGHTS["commodity"]
    )
    return EconomicImpact(
        gdp_impact=gdp,
        inflation_impact=inflation,
        consumer_confidence_impact=confidence_score,
        retail_sales_impact=retail,
        commodity_impact=commodity,
        overall_impact=overall,
        confidence=data_confidence(data),
    )


class EconomicService:
    """Economic data shared by all tenants, cached under the global namespace."""

    def __init__(self, strategies: CacheStrategies, settings: Settings) -> None:
        self.strategies = strategies
        self.ttl = settings.cache_ttl_external_api

    async def get_indicators(self, country: str = "US") -> EconomicData:
        country = country.upper()
        key = external_api_key(
            "economic", canonical_digest({"kind": "indicators", "country": country})
        )

        async def produce() -> dict:
            logger.info("Loading economic indicators for %s", country)
            return reference_economic_data(country).to_cache()

        return await self.strategies.cache_aside(
            key, produce, self.ttl, validate=EconomicData.model_validate
        )
