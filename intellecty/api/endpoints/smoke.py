"""Smoke-test endpoint used by deployment checks."""

from datetime import datetime, timezone

from fastapi import APIRouter

from intellecty.schemas.health import SmokeTestResponse

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("", response_model=SmokeTestResponse)
def smoke_get() -> SmokeTestResponse:
    return SmokeTestResponse(message="Test API GET is working", timestamp=_now())


@router.post("", response_model=SmokeTestResponse)
def smoke_post() -> SmokeTestResponse:
    return SmokeTestResponse(message="Test API is working", timestamp=_now())
