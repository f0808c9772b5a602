"""Tests for raw ASGI middleware (timeout, body size, tenant context) and the log filter."""

import asyncio
import logging

from httpx import ASGITransport, AsyncClient
from starlette.responses import JSONResponse

from intellecty.core.tenant_context import current_tenant_id, get_tenant_id
from intellecty.middleware import (
    RequestSizeLimitMiddleware,
    TenantContextMiddleware,
    TimeoutMiddleware,
)
from intellecty.middleware.request_id import resolve_request_id
from intellecty.shared.logging import TenantContextFilter


async def _slow_app(scope, receive, send) -> None:
    await asyncio.sleep(1)
    await JSONResponse({"done": True})(scope, receive, send)


async def _tenant_echo_app(scope, receive, send) -> None:
    await JSONResponse({"tenant": get_tenant_id()})(scope, receive, send)


async def test_timeout_returns_504_envelope() -> None:
    app = TimeoutMiddleware(_slow_app, timeout_seconds=0.05)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")
    assert response.status_code == 504
    assert response.json()["success"] is False
    assert response.json()["code"] == "GATEWAY_TIMEOUT"


async def test_fast_request_passes_through_timeout() -> None:
    app = TimeoutMiddleware(_tenant_echo_app, timeout_seconds=5)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")
    assert response.status_code == 200


async def test_tenant_context_is_set_for_request_only() -> None:
    app = TenantContextMiddleware(_tenant_echo_app, "X-Tenant-ID", "demo-tenant")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        explicit = await ac.get("/", headers={"X-Tenant-ID": "acme-growth"})
        default = await ac.get("/")
        malformed = await ac.get("/", headers={"X-Tenant-ID": "a b"})
    assert explicit.json() == {"tenant": "acme-growth"}
    assert default.json() == {"tenant": "demo-tenant"}
    assert malformed.json() == {"tenant": None}
    assert get_tenant_id() is None


def test_resolve_request_id() -> None:
    assert resolve_request_id("req_42") == "req_42"
    assert resolve_request_id("x" * 65) != "x" * 65
    assert resolve_request_id(None)


def test_log_filter_adds_tenant() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    token = current_tenant_id.set("globex-premium")
    try:
        assert TenantContextFilter().filter(record) is True
    finally:
        current_tenant_id.reset(token)
    assert record.tenant_id == "globex-premium"

    TenantContextFilter().filter(record)
    assert record.tenant_id == "-"


async def _echo_body_app(scope, receive, send) -> None:
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body", False):
            break
    await JSONResponse({"received": len(body)})(scope, receive, send)


async def test_size_limit_rejects_declared_length() -> None:
    app = RequestSizeLimitMiddleware(_echo_body_app, max_bytes=100)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        small = await ac.post("/", content=b"x" * 100)
        large = await ac.post("/", content=b"x" * 101)
    assert small.json() == {"received": 100}
    assert large.status_code == 413
    assert large.json() == {
        "success": False,
        "error": "Request body must be at most 100 bytes",
        "code": "PAYLOAD_TOO_LARGE",
        "details": {"max_bytes": 100, "received_bytes": 101},
    }


async def test_size_limit_counts_chunked_bodies() -> None:
    async def chunks(count: int):
        for _ in range(count):
            yield b"x" * 40

    app = RequestSizeLimitMiddleware(_echo_body_app, max_bytes=100)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        small = await ac.post("/", content=chunks(2))
        large = await ac.post("/", content=chunks(3))
    assert small.json() == {"received": 80}
    assert large.status_code == 413
    assert large.json()["code"] == "PAYLOAD_TOO_LARGE"
