"""Cache: tag-aware read-through cache backends and cache key utilities.

Used by the author use cases for paginated list pages. Backends implement
TagAwareCacheProtocol; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import Producer, TagAwareCacheProtocol
from app.infrastructure.cache.factory import close_cache, create_cache
from app.infrastructure.cache.keys import author_list_key, list_key
from app.infrastructure.cache.memory_cache import InMemoryTagAwareCache
from app.infrastructure.cache.redis_cache import RedisTagAwareCache
from app.infrastructure.cache.single_flight import SingleFlight

__all__ = [
    "InMemoryTagAwareCache",
    "Producer",
    "RedisTagAwareCache",
    "SingleFlight",
    "TagAwareCacheProtocol",
    "author_list_key",
    "close_cache",
    "create_cache",
    "list_key",
]
