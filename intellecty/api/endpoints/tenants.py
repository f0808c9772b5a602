"""Tenant info endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from intellecty.api.dependencies import TenantDep, get_tenant_service
from intellecty.application.services.tenant_service import TenantService
from intellecty.schemas.common import ApiResponse
from intellecty.schemas.tenant import TenantInfo

router = APIRouter()


@router.get("/info", response_model=ApiResponse[TenantInfo])
async def tenant_info(
    tenant: TenantDep,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
):
    """Tier, feature flags, limits and today's usage of the calling tenant."""
    return ApiResponse(data=await tenant_service.info(tenant))
