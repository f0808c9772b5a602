"""Security headers for JSON API responses. Raw ASGI."""

from typing import Callable

from intellecty.middleware._headers import merge_headers

API_SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}
HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")


def SecurityHeadersMiddleware(app: Callable, hsts: bool = False) -> Callable:
    """Set security headers that the route did not set itself.

    HSTS is only sent when hsts is True (production behind TLS).
    """
    pairs = list(API_SECURITY_HEADERS.items())
    if hsts:
        pairs.append(HSTS_HEADER)
    encoded = [(k.lower().encode(), v.encode()) for k, v in pairs]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                merge_headers(message, encoded)
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
