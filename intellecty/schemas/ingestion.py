"""Data ingestion schemas."""

from pydantic import Field

from intellecty.schemas.common import CamelModel


class RowError(CamelModel):
    row: int
    message: str


class ValidationResults(CamelModel):
    total_rows: int
    valid_rows: int
    errors: list[RowError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class UploadResult(CamelModel):
    """Response data for POST /data-ingestion/upload."""

    data_source_id: str
    data_type: str
    filename: str
    content_type: str
    total_records: int
    processed_records: int
    validation_results: ValidationResults
    schema_mapping: dict[str, str]
    duplicate: bool = False
    uploaded_at: str
