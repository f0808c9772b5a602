"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    status: str = Field(default="ok", description="Readiness status")
    cache: str = Field(default="ok", description="ok, disabled or unavailable")


class SmokeTestResponse(BaseModel):
    """Response for GET/POST /test."""

    success: bool = True
    message: str
    timestamp: str
