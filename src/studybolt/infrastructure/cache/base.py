"""Cache store interface."""

from abc import ABC, abstractmethod


class CacheStore(ABC):
    """Key-value store with per-entry TTL.

    Implementations raise ``CacheUnavailable`` when the backing service
    cannot be reached; an expired entry reads as ``None``.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        pass

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None on miss/expiry."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Check connectivity; raise ``CacheUnavailable`` when down."""
        pass

    async def close(self) -> None:
        return None
