"""Request body size limit middleware.

Answers 413 with the failure envelope when a request body is larger than
max_bytes. A declared Content-Length is checked before the app runs; bodies
without one (chunked) are read up to the limit and then replayed to the
app. Raw ASGI.
"""

import json
import logging
from typing import Callable

from intellecty.middleware._headers import get_header

logger = logging.getLogger(__name__)


async def _reject(send: Callable, max_bytes: int, received: int) -> None:
    body = json.dumps(
        {
            "success": False,
            "error": f"Request body must be at most {max_bytes} bytes",
            "code": "PAYLOAD_TOO_LARGE",
            "details": {"max_bytes": max_bytes, "received_bytes": received},
        }
    ).encode()
    await send(
        {
            "type": "http.response.start",
            "status": 413,
            "headers": [(b"content-type", b"application/json")],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})


def _replay(chunks: list[bytes]) -> Callable:
    """A receive callable that hands back chunks, then an empty final message."""
    pending = list(chunks)

    async def receive() -> dict:
        if pending:
            body = pending.pop(0)
            return {"type": "http.request", "body": body, "more_body": bool(pending)}
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject HTTP requests whose body exceeds max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                length = 0
            if length > max_bytes:
                logger.warning("Rejected %s-byte body on %s", length, scope.get("path", ""))
                await _reject(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            if message["type"] != "http.request":
                continue
            chunk = message.get("body", b"")
            total += len(chunk)
            if total > max_bytes:
                logger.warning("Rejected streamed body over %s bytes on %s", max_bytes, scope.get("path", ""))
                await _reject(send, max_bytes, total)
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        await app(scope, _replay(chunks), send)

    return asgi_app
