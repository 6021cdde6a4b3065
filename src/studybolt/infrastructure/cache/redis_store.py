"""Redis-backed cache store."""

from typing import Any, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

from studybolt.infrastructure.cache.base import CacheStore
from studybolt.shared.exceptions import CacheUnavailable
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)


class RedisCacheStore(CacheStore):
    """Cache store on top of ``redis.asyncio``.

    Expiry is delegated to Redis (``SET ... EX``), so an entry is never
    served past its TTL.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 5.0) -> "RedisCacheStore":
        client = cast(Any, redis.from_url)(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    @property
    def backend_name(self) -> str:
        return "redis"

    async def get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
        except RedisError as e:
            raise CacheUnavailable(f"Redis GET failed: {e}") from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheUnavailable(f"Redis SET failed: {e}") from e

    async def ping(self) -> None:
        try:
            await self.client.ping()
        except RedisError as e:
            raise CacheUnavailable(f"Redis PING failed: {e}") from e

    async def close(self) -> None:
        close = getattr(self.client, "aclose", None) or getattr(self.client, "close", None)
        if close is not None:
            await close()
        logger.info("redis_connection_closed")
