"""Presentation-layer dependency injection (composition root).

Builds application services from the process-wide cache and HTTP client
stored on app.state by the lifespan. Routes depend only on these.
"""

from __future__ import annotations

import logging
from typing import Annotated

import httpx
from fastapi import Depends, Request

from intellecty.application.services.abc_analysis_service import AbcAnalysisService
from intellecty.application.services.economic_service import EconomicService
from intellecty.application.services.forecasting_service import ForecastingService
from intellecty.application.services.ingestion_service import IngestionService
from intellecty.application.services.inventory_service import InventoryService
from intellecty.application.services.tenant_service import TenantService
from intellecty.application.services.weather_service import WeatherService
from intellecty.core.config import Settings, get_settings
from intellecty.core.tenant_context import is_valid_tenant_id_format
from intellecty.domain.entities.tenant import Tenant, find_tenant
from intellecty.domain.exceptions import TenantNotFoundException, ValidationException
from intellecty.infrastructure.cache import CacheStrategies, TenantCache
from intellecty.infrastructure.exceptions import CacheException

logger = logging.getLogger(__name__)

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_cache(request: Request) -> TenantCache:
    """Return the process-wide TenantCache created at startup."""
    return request.app.state.cache


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Return the shared outbound HTTP client created at startup."""
    return request.app.state.http_client


CacheDep = Annotated[TenantCache, Depends(get_cache)]


def get_strategies(cache: CacheDep) -> CacheStrategies:
    return CacheStrategies(cache)


StrategiesDep = Annotated[CacheStrategies, Depends(get_strategies)]


def get_tenant_service(cache: CacheDep, settings: SettingsDep) -> TenantService:
    return TenantService(cache, usage_ttl=settings.cache_ttl_usage)


async def get_tenant(
    request: Request,
    settings: SettingsDep,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> Tenant:
    """Resolve the tenant from the tenant header (default tenant when absent).

    Counts the request against the tenant's daily API usage; a counter that
    cannot be updated is logged and does not fail the request.

    Raises:
        ValidationException: Malformed tenant ID.
        TenantNotFoundException: Tenant is not registered.
    """
    tenant_id = request.headers.get(settings.tenant_header_name) or settings.default_tenant_id
    if not is_valid_tenant_id_format(tenant_id):
        raise ValidationException("Invalid tenant ID", field=settings.tenant_header_name)
    tenant = find_tenant(tenant_id)
    if tenant is None:
        raise TenantNotFoundException(tenant_id)
    if tenant_service.cache.is_available():
        try:
            await tenant_service.record_api_call(tenant.id)
        except CacheException as e:
            logger.warning("API usage not recorded for tenant %s: %s", tenant.id, e.message)
    return tenant


TenantDep = Annotated[Tenant, Depends(get_tenant)]


def get_inventory_service() -> InventoryService:
    return InventoryService()


def get_abc_service(strategies: StrategiesDep, settings: SettingsDep) -> AbcAnalysisService:
    return AbcAnalysisService(strategies, settings)


def get_economic_service(strategies: StrategiesDep, settings: SettingsDep) -> EconomicService:
    return EconomicService(strategies, settings)


def get_weather_service(
    strategies: StrategiesDep,
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: SettingsDep,
) -> WeatherService:
    return WeatherService(strategies, http_client, settings)


def get_forecasting_service(
    cache: CacheDep,
    economic: Annotated[EconomicService, Depends(get_economic_service)],
    settings: SettingsDep,
) -> ForecastingService:
    return ForecastingService(cache, economic, settings)


def get_ingestion_service(cache: CacheDep, settings: SettingsDep) -> IngestionService:
    return IngestionService(cache, ttl=settings.cache_ttl_uploads, max_upload_size=settings.max_upload_size)
