"""Per-request tenant: ID format check and the context variable.

TenantContextMiddleware stores the caller's tenant ID in current_tenant_id
so log records carry it without passing it through every call. Tenant IDs
also become cache key components, so only letters, digits, "-" and "_"
are accepted.
"""

import re
from contextvars import ContextVar

MAX_TENANT_ID_LENGTH = 64
_TENANT_ID_PATTERN = re.compile(rf"[A-Za-z0-9_-]{{1,{MAX_TENANT_ID_LENGTH}}}")

current_tenant_id: ContextVar[str | None] = ContextVar("intellecty_tenant_id", default=None)


def is_valid_tenant_id_format(value: str | None) -> bool:
    """True if value can be used as a tenant ID (and a cache key component)."""
    return bool(value) and _TENANT_ID_PATTERN.fullmatch(value) is not None


def get_tenant_id() -> str | None:
    """Tenant of the request being handled, or None outside a request."""
    return current_tenant_id.get()
