"""Data ingestion endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from intellecty.api.dependencies import TenantDep, get_ingestion_service
from intellecty.application.services.ingestion_service import IngestionService
from intellecty.core.limiter import limit_upload
from intellecty.schemas.common import ApiResponse
from intellecty.schemas.ingestion import UploadResult

router = APIRouter()


@router.post("/upload", response_model=ApiResponse[UploadResult])
@limit_upload
async def upload_data(
    request: Request,
    tenant: TenantDep,
    ingestion: Annotated[IngestionService, Depends(get_ingestion_service)],
    file: UploadFile = File(...),
    data_type: str | None = Form(None, alias="dataType"),
):
    """Validate a CSV or Excel file of products, sales or inventory."""
    content = await file.read()
    result = await ingestion.process_upload(
        tenant_id=tenant.id,
        filename=file.filename or "upload",
        content_type=file.content_type,
        content=content,
        data_type=data_type,
    )
    return ApiResponse(data=result)
