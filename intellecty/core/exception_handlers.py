"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every handler answers with
the failure envelope {"success": false, "error": ..., "code": ...}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from intellecty.core.config import get_settings
from intellecty.domain.exceptions import IntellectyException

logger = logging.getLogger(__name__)

# Map error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "TENANT_NOT_FOUND": 404,
    "FEATURE_NOT_AVAILABLE": 403,
    "TIER_LIMIT_EXCEEDED": 403,
    "CACHE_UNAVAILABLE": 503,
    "CACHE_WRITE_ERROR": 500,
}


def _failure(status: int, error: str, code: str, details: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error, "code": code}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status, content=body)


def _intellecty_exception_handler(request: Request, exc: IntellectyException) -> JSONResponse:
    """Return exc.to_dict() with the status for its error_code (500 if unmapped)."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 naming the first invalid field, with all errors as details."""
    errors = exc.errors()
    message = "Request validation failed"
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query"))
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return _failure(
        400,
        message,
        "VALIDATION_ERROR",
        {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _failure(exc.status_code, str(exc.detail), "HTTP_ERROR")


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _failure(429, f"Rate limit exceeded: {exc.detail}", "RATE_LIMITED")


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail = str(exc) if get_settings().debug else "Internal server error"
    return _failure(500, detail, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: IntellectyException (and subclasses), RequestValidationError,
    RateLimitExceeded, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(IntellectyException, _intellecty_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
