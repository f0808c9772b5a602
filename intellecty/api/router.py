"""API router aggregation.

Includes all endpoint modules with consistent prefixes and tags. Mounted
under /api by intellecty.main.
"""

from fastapi import APIRouter

from intellecty.api.endpoints import (
    analytics,
    data_ingestion,
    external_apis,
    forecasting,
    health,
    inventory,
    smoke,
    tenants,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(smoke.router, prefix="/test", tags=["health"])
api_router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(forecasting.router, prefix="/forecasting", tags=["forecasting"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(external_apis.router, prefix="/external-apis", tags=["external-apis"])
api_router.include_router(data_ingestion.router, prefix="/data-ingestion", tags=["data-ingestion"])
