"""Factory for the configured cache store."""

from studybolt.config import Settings
from studybolt.infrastructure.cache.base import CacheStore
from studybolt.infrastructure.cache.memory_store import MemoryCacheStore
from studybolt.infrastructure.cache.redis_store import RedisCacheStore
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)


def build_cache_store(settings: Settings) -> CacheStore:
    if settings.cache_backend == "memory":
        logger.info("using_cache_backend", backend="memory")
        return MemoryCacheStore()

    logger.info("using_cache_backend", backend="redis")
    return RedisCacheStore.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout_seconds,
    )
