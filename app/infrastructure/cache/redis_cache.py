"""Redis-backed tag-aware cache shared by all workers.

Layout under the configured namespace:

- ``<ns>:entry:<key>``: hash with ``payload`` (bytes) and ``tags`` (JSON tag -> version)
- ``<ns>:tag:<tag>:version``: INCR counter bumped on every invalidation
- ``<ns>:tag:<tag>:keys``: set of cache keys indexed under the tag

Stores WATCH the tag version keys, so an invalidation that lands while a
page is being produced aborts the write. When Redis is unreachable the cache
degrades to always-miss: producers still run (single-flight per process) and
their result is returned without being stored.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

import redis.asyncio as redis
from redis.exceptions import WatchError

from app.core.config import Settings, get_settings
from app.infrastructure.cache.cache_protocol import Producer
from app.infrastructure.cache.keys import normalize_tags, validate_key
from app.infrastructure.cache.memory_cache import ensure_payload
from app.infrastructure.cache.single_flight import SingleFlight

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLEAR_CHUNK_SIZE = 500


class RedisTagAwareCache:
    """Async Redis implementation of TagAwareCacheProtocol.

    Call connect() at startup and disconnect() at shutdown. A failed
    invalidation is kept as pending and retried before the next read; until
    it succeeds, reads bypass the cache so stale pages are never served.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        *,
        settings: Settings | None = None,
        namespace: str | None = None,
        default_ttl: int | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI (treated as connected).
            settings: Settings for connection parameters; defaults to get_settings().
            namespace: Key prefix; defaults to settings.cache_namespace.
            default_ttl: Seconds applied when get() gets no ttl; None or 0 = never expire.
        """
        self.settings = settings or get_settings()
        self.redis = redis_client
        self.namespace = namespace or self.settings.cache_namespace
        self.default_ttl = default_ttl
        self._connected = redis_client is not None
        self._flights: SingleFlight[bytes] = SingleFlight()
        self._pending_invalidations: set[str] = set()

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=(
                    self.settings.redis_password.get_secret_value()
                    if self.settings.redis_password
                    else None
                ),
                decode_responses=False,
                socket_connect_timeout=self.settings.redis_socket_timeout,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache degraded to always-miss.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a connection error. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing broken Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    async def _with_reconnect(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation; on connection loss reconnect once and retry."""
        try:
            return await operation()
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect():
                raise
            return await operation()

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def _entry_key(self, key: str) -> str:
        return f"{self.namespace}:entry:{key}"

    def _version_key(self, tag: str) -> str:
        return f"{self.namespace}:tag:{tag}:version"

    def _index_key(self, tag: str) -> str:
        return f"{self.namespace}:tag:{tag}:keys"

    async def get(
        self,
        key: str,
        tags: Iterable[str],
        producer: Producer,
        ttl: int | None = None,
    ) -> bytes:
        validate_key(key)
        tag_list = normalize_tags(tags)
        snapshot: dict[str, int] | None = None
        if await self._flush_pending_invalidations():
            try:
                payload, snapshot = await self._with_reconnect(
                    lambda: self._read(key, tag_list)
                )
            except redis.RedisError:
                logger.exception("Cache get error for key %s; serving uncached", key)
            else:
                if payload is not None:
                    logger.debug("Cache HIT: %s", key)
                    return payload
        logger.debug("Cache MISS: %s", key)
        return await self._flights.do(
            key, tag_list, lambda: self._produce(key, tag_list, producer, snapshot, ttl)
        )

    async def _read(
        self, key: str, tags: tuple[str, ...]
    ) -> tuple[bytes | None, dict[str, int]]:
        """Return (payload if fresh, current tag versions) in one round-trip."""
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.hgetall(self._entry_key(key))
            pipe.mget([self._version_key(t) for t in tags])
            entry, raw_versions = await pipe.execute()
        current = {tag: int(v or 0) for tag, v in zip(tags, raw_versions)}
        if not entry:
            return None, current
        stored = json.loads(entry[b"tags"])
        if stored != current:
            logger.debug("Cache STALE: %s", key)
            return None, current
        return entry[b"payload"], current

    async def _produce(
        self,
        key: str,
        tags: tuple[str, ...],
        producer: Producer,
        snapshot: dict[str, int] | None,
        ttl: int | None,
    ) -> bytes:
        payload = ensure_payload(await producer())
        if snapshot is not None and self.is_available():
            try:
                await self._store(key, tags, payload, snapshot, ttl)
            except redis.RedisError:
                logger.warning("Cache set unavailable for key %s", key, exc_info=True)
        return payload

    async def _store(
        self,
        key: str,
        tags: tuple[str, ...],
        payload: bytes,
        snapshot: dict[str, int],
        ttl: int | None,
    ) -> bool:
        """Write the entry unless a tag version moved since snapshot. Returns True if stored."""
        ttl = self.default_ttl if ttl is None else ttl
        entry_key = self._entry_key(key)
        version_keys = [self._version_key(t) for t in tags]
        async with self.redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(*version_keys)
                raw_versions = await pipe.mget(version_keys)
                current = {tag: int(v or 0) for tag, v in zip(tags, raw_versions)}
                if current != snapshot:
                    logger.debug("Cache SKIP (tags invalidated during production): %s", key)
                    return False
                pipe.multi()
                pipe.delete(entry_key)
                pipe.hset(entry_key, mapping={"payload": payload, "tags": json.dumps(snapshot)})
                if ttl:
                    pipe.expire(entry_key, ttl)
                for tag in tags:
                    pipe.sadd(self._index_key(tag), key)
                await pipe.execute()
            except WatchError:
                logger.debug("Cache SKIP (concurrent invalidation): %s", key)
                return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl or "none")
        return True

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        tag_list = sorted(set(tags))
        if not tag_list:
            return 0
        self._flights.forget_tags(tag_list)
        self._pending_invalidations.update(tag_list)
        if not self.is_available():
            logger.warning(
                "Cache invalidate deferred for tags %s (Redis disconnected)", tag_list
            )
            return 0
        pending = sorted(self._pending_invalidations)
        try:
            removed = await self._with_reconnect(lambda: self._invalidate(pending))
        except redis.RedisError:
            logger.exception("Cache invalidate error for tags %s; retrying before next read", pending)
            return 0
        self._pending_invalidations.difference_update(pending)
        logger.info("Cache INVALIDATE tags=%s (%s keys)", pending, removed)
        return removed

    async def _invalidate(self, tags: list[str]) -> int:
        """Bump tag versions, unlink indexed entries and drop the tag indexes.

        The tag indexes are WATCHed, so a store that adds a key between the
        SMEMBERS read and the MULTI block makes redis-py retry the whole
        transaction and the new entry is unlinked too.
        """
        index_keys = [self._index_key(t) for t in tags]
        unlinked = False

        async def apply(pipe: redis.client.Pipeline) -> None:
            nonlocal unlinked
            members = [await pipe.smembers(index_key) for index_key in index_keys]
            entry_keys = sorted(
                {self._entry_key(m.decode()) for keys in members for m in keys}
            )
            unlinked = bool(entry_keys)
            pipe.multi()
            for tag in tags:
                pipe.incr(self._version_key(tag))
            if entry_keys:
                pipe.unlink(*entry_keys)
            pipe.delete(*index_keys)

        results = await self.redis.transaction(apply, *index_keys)
        return int(results[len(tags)]) if unlinked else 0

    async def _flush_pending_invalidations(self) -> bool:
        """Apply deferred invalidations. Returns True if the cache may be read."""
        if not self.is_available():
            return False
        if not self._pending_invalidations:
            return True
        pending = sorted(self._pending_invalidations)
        try:
            removed = await self._with_reconnect(lambda: self._invalidate(pending))
        except redis.RedisError:
            logger.warning("Pending cache invalidation for %s still failing; bypassing cache", pending)
            return False
        self._pending_invalidations.difference_update(pending)
        logger.info("Cache INVALIDATE (deferred) tags=%s (%s keys)", pending, removed)
        return True

    async def delete(self, key: str) -> bool:
        """Evict one key. Returns True if it was present."""
        self._flights.forget(key)
        if not self.is_available():
            return False
        try:
            deleted = await self._with_reconnect(
                lambda: self.redis.unlink(self._entry_key(key))
            )
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False
        logger.debug("Cache DELETE: %s", key)
        return bool(deleted)

    async def clear(self) -> None:
        """Delete every key under the namespace using SCAN + batched UNLINK (non-blocking)."""
        self._flights = SingleFlight()
        if not self.is_available():
            return
        try:
            deleted = await self._with_reconnect(self._unlink_namespace)
        except redis.RedisError:
            logger.exception("Cache clear error")
            return
        logger.warning("Cache CLEARED: %s keys deleted", deleted)

    async def _unlink_namespace(self) -> int:
        deleted = 0
        chunk: list[bytes] = []
        async for key in self.redis.scan_iter(match=f"{self.namespace}:*"):
            chunk.append(key)
            if len(chunk) >= _CLEAR_CHUNK_SIZE:
                deleted += await self.redis.unlink(*chunk)
                chunk = []
        if chunk:
            deleted += await self.redis.unlink(*chunk)
        return deleted
