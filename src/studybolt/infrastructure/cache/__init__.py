"""Response cache stores."""

from studybolt.infrastructure.cache.base import CacheStore
from studybolt.infrastructure.cache.factory import build_cache_store
from studybolt.infrastructure.cache.memory_store import MemoryCacheStore
from studybolt.infrastructure.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
]
