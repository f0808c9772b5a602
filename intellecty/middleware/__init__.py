"""HTTP middleware: timeout, body size limit, request ID, tenant context, security headers.

Applied in intellecty.main; order matters (last added = outermost).
"""

from intellecty.middleware.request_id import RequestIDMiddleware
from intellecty.middleware.request_size_limit import RequestSizeLimitMiddleware
from intellecty.middleware.security_headers import SecurityHeadersMiddleware
from intellecty.middleware.tenant_context import TenantContextMiddleware
from intellecty.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TenantContextMiddleware",
    "TimeoutMiddleware",
]
