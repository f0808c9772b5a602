"""Tenant context middleware.

Puts the tenant named by the tenant header into the tenant context variable
for the duration of the request. Malformed values are not set; the tenant
dependency rejects them. Raw ASGI.
"""

from typing import Callable

from intellecty.core.tenant_context import current_tenant_id, is_valid_tenant_id_format
from intellecty.middleware._headers import get_header


def TenantContextMiddleware(
    app: Callable, header_name: str, default_tenant_id: str
) -> Callable:
    """Set current_tenant_id from header_name (or default_tenant_id) per request."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = get_header(scope, header_name) or default_tenant_id
        token = current_tenant_id.set(raw if is_valid_tenant_id_format(raw) else None)
        try:
            await app(scope, receive, send)
        finally:
            current_tenant_id.reset(token)

    return asgi_app
