"""Header helpers for raw ASGI middleware. Headers are (bytes, bytes) pairs."""


def get_header(scope: dict, name: str) -> str | None:
    """Return the first value of header name (case-insensitive), or None."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def merge_headers(message: dict, extra: list[tuple[bytes, bytes]]) -> None:
    """Add extra headers to an http.response.start message unless already set."""
    headers = list(message.get("headers", []))
    seen = {k.lower() for k, _ in headers}
    for key, value in extra:
        if key.lower() not in seen:
            headers.append((key, value))
            seen.add(key.lower())
    message["headers"] = headers
