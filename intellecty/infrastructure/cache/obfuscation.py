"""Reversible obfuscation of cached text.

This is NOT encryption: anyone holding the key (or guessing it) can
reverse it. It keeps casual readers of the Redis keyspace from seeing
payloads in plain JSON. Use authenticated encryption if cached data
needs real confidentiality.
"""

import base64
import binascii
from itertools import cycle


class CacheObfuscator:
    """XOR with a repeating key, then base64. An empty key means plain base64."""

    def __init__(self, key: str | bytes = b"") -> None:
        self._key = key.encode("utf-8") if isinstance(key, str) else key

    def _xor(self, data: bytes) -> bytes:
        if not self._key:
            return data
        return bytes(b ^ k for b, k in zip(data, cycle(self._key)))

    def obfuscate(self, text: str) -> str:
        """Return the obfuscated form of text (ASCII-safe)."""
        return base64.b64encode(self._xor(text.encode("utf-8"))).decode("ascii")

    def reveal(self, token: str) -> str:
        """Reverse obfuscate().

        Raises:
            ValueError: If token is not valid base64 or does not decode to UTF-8.
        """
        try:
            raw = base64.b64decode(token.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ValueError(f"Malformed obfuscated value: {e}") from e
        try:
            return self._xor(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"Obfuscated value is not valid UTF-8: {e}") from e
