"""Request ID middleware.

Forwards a well-formed client X-Request-ID or generates one, exposes it on
request.state.request_id and echoes it on the response. Raw ASGI.
"""

import re
import uuid
from typing import Callable

from intellecty.middleware._headers import get_header, merge_headers

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$")


def resolve_request_id(raw: str | None) -> str:
    """Return raw when it is safe to log; otherwise a fresh UUID4."""
    candidate = (raw or "").strip()
    if _REQUEST_ID_RE.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request ID header on every HTTP exchange."""
    header_bytes = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                merge_headers(message, [(header_bytes, request_id.encode())])
            await send(message)

        await app(scope, receive, send_with_id)

    return asgi_app
