"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
See intellecty.core.lifespan and intellecty.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intellecty.api.router import api_router
from intellecty.core.config import get_settings
from intellecty.core.constants import MULTIPART_OVERHEAD_BYTES
from intellecty.core.exception_handlers import register_exception_handlers
from intellecty.core.lifespan import create_lifespan
from intellecty.core.limiter import limiter
from intellecty.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TenantContextMiddleware,
    TimeoutMiddleware,
)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    register_exception_handlers(app)

    # Last added = outermost: timeout -> body size limit -> request ID -> tenant context -> security -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    app.add_middleware(
        TenantContextMiddleware,
        header_name=settings.tenant_header_name,
        default_tenant_id=settings.default_tenant_id,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_upload_size + MULTIPART_OVERHEAD_BYTES,
    )
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
