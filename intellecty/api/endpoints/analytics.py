"""Analytics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from intellecty.api.dependencies import TenantDep, get_abc_service
from intellecty.application.services.abc_analysis_service import AbcAnalysisService
from intellecty.schemas.analytics import AbcReport
from intellecty.schemas.common import ApiResponse

router = APIRouter()


@router.get("/abc-analysis", response_model=ApiResponse[AbcReport])
async def abc_analysis(
    tenant: TenantDep,
    abc: Annotated[AbcAnalysisService, Depends(get_abc_service)],
    vertical: str | None = Query(None, max_length=20),
    category: str | None = Query(None, max_length=100),
):
    """ABC classification of the catalog by inventory value."""
    return ApiResponse(data=await abc.get_report(tenant.id, vertical=vertical, category=category))
