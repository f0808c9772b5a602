"""Shared API schemas: camelCase base model and the response envelope."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for payloads exchanged with the dashboards (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_cache(self) -> dict[str, Any]:
        """JSON-safe dict for storing in the cache (wire field names)."""
        return self.model_dump(mode="json", by_alias=True)


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope: {"success": true, "data": ...}."""

    success: bool = True
    data: DataT


class ErrorResponse(BaseModel):
    """Failure envelope returned by every exception handler."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    details: dict[str, Any] | None = None
