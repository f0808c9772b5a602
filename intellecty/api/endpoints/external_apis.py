"""Economic and weather data endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from intellecty.api.dependencies import TenantDep, get_economic_service, get_weather_service
from intellecty.application.services import economic_service, weather_service
from intellecty.application.services.economic_service import EconomicService
from intellecty.application.services.weather_service import WeatherService
from intellecty.schemas.common import ApiResponse
from intellecty.schemas.external import EconomicReport, WeatherReport

router = APIRouter()


@router.get("/economic", response_model=ApiResponse[EconomicReport])
async def economic_data(
    tenant: TenantDep,
    economic: Annotated[EconomicService, Depends(get_economic_service)],
    country: str = Query("US", min_length=2, max_length=3, pattern=r"^[A-Za-z]+$"),
    category: str | None = Query(None, max_length=100),
    price_sensitivity: float = Query(0.5, alias="priceSensitivity", ge=0, le=1),
):
    """Economic indicators and commodities; impact analysis when category is given."""
    data = await economic.get_indicators(country)
    impact = (
        economic_service.analyze_impact(data, category, price_sensitivity) if category else None
    )
    return ApiResponse(data=EconomicReport(**data.model_dump(), impact=impact))


@router.get("/weather", response_model=ApiResponse[WeatherReport])
async def weather_data(
    tenant: TenantDep,
    weather: Annotated[WeatherService, Depends(get_weather_service)],
    lat: float = Query(40.7128, ge=-90, le=90),
    lon: float = Query(-74.0060, ge=-180, le=180),
    days: int = Query(5, ge=1, le=5),
    category: str | None = Query(None, max_length=100),
):
    """Current weather and daily forecast; impact analysis when category is given."""
    data = await weather.get_forecast(lat, lon, days)
    impact = weather_service.analyze_impact(data, category) if category else None
    return ApiResponse(data=WeatherReport(**data.model_dump(), impact=impact))
