"""Cache backend factory. Picks the implementation from settings.cache_backend."""

from app.core.config import Settings
from app.infrastructure.cache.cache_protocol import TagAwareCacheProtocol
from app.infrastructure.cache.memory_cache import InMemoryTagAwareCache
from app.infrastructure.cache.redis_cache import RedisTagAwareCache


async def create_cache(settings: Settings) -> TagAwareCacheProtocol:
    """Build (and for Redis, connect) the configured cache backend."""
    if settings.cache_backend == "memory":
        return InMemoryTagAwareCache(max_entries=settings.cache_max_entries)
    cache = RedisTagAwareCache(settings=settings)
    await cache.connect()
    return cache


async def close_cache(cache: TagAwareCacheProtocol | None) -> None:
    """Release backend resources (no-op for the in-memory cache)."""
    if isinstance(cache, RedisTagAwareCache):
        await cache.disconnect()
