"""Demand forecasting endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from intellecty.api.dependencies import TenantDep, get_forecasting_service
from intellecty.application.services.forecasting_service import ForecastingService
from intellecty.core.limiter import limit_forecasts
from intellecty.schemas.common import ApiResponse
from intellecty.schemas.forecasting import ForecastRequest, ForecastResult, ForecastSummary

router = APIRouter()

ForecastingDep = Annotated[ForecastingService, Depends(get_forecasting_service)]


@router.post("/generate", response_model=ApiResponse[ForecastResult])
@limit_forecasts
async def generate_forecast(
    request: Request,
    body: ForecastRequest,
    tenant: TenantDep,
    forecasting: ForecastingDep,
):
    """Daily demand forecast for a product over body.horizon days."""
    return ApiResponse(data=await forecasting.generate(tenant, body))


@router.get("/generate", response_model=ApiResponse[list[ForecastSummary]])
async def forecast_history(
    tenant: TenantDep,
    forecasting: ForecastingDep,
    product_id: str | None = Query(None, alias="productId", max_length=64),
    limit: int = Query(50, ge=1, le=1000),
):
    """Latest forecast summaries (at most 10 products)."""
    return ApiResponse(data=await forecasting.history(tenant.id, product_id=product_id, limit=limit))
