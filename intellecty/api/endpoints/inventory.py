"""Inventory health and replenishment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from intellecty.api.dependencies import TenantDep, get_inventory_service
from intellecty.application.services.inventory_service import InventoryService
from intellecty.core.limiter import limit_writes
from intellecty.schemas.common import ApiResponse
from intellecty.schemas.inventory import InventoryOverview, OptimizationResult, OptimizeRequest

router = APIRouter()

InventoryDep = Annotated[InventoryService, Depends(get_inventory_service)]


@router.get("/optimize", response_model=ApiResponse[InventoryOverview])
async def inventory_overview(
    tenant: TenantDep,
    inventory: InventoryDep,
    category: str | None = Query(None, max_length=100),
    vertical: str | None = Query(None, max_length=20),
):
    """Stock status of every product, optionally filtered by vertical and category."""
    return ApiResponse(data=inventory.overview(vertical=vertical, category=category))


@router.post("/optimize", response_model=ApiResponse[OptimizationResult])
@limit_writes
async def optimize_inventory(
    request: Request,
    body: OptimizeRequest,
    tenant: TenantDep,
    inventory: InventoryDep,
):
    """Replenishment recommendation for one product."""
    return ApiResponse(data=inventory.optimize(body))
