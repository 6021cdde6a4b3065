"""In-process cache store for development and tests."""

import time
from collections.abc import Callable

from studybolt.infrastructure.cache.base import CacheStore


class MemoryCacheStore(CacheStore):
    """Dict-backed cache store; expiry is checked on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        self._sweep(now)
        self._entries[key] = (value, now + ttl_seconds)

    def _sweep(self, now: float) -> None:
        """Drop every expired entry."""
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]

    async def ping(self) -> None:
        return None
