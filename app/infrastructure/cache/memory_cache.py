"""In-process tag-aware cache (development, single worker, tests).

Primary store key -> CacheEntry plus a reverse index tag -> keys, so
invalidation touches only the affected entries. Each tag also carries a
version; entries remember the versions current when their production
started and are discarded if any of them moved since.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from app.infrastructure.cache.cache_protocol import Producer
from app.infrastructure.cache.keys import normalize_tags, validate_key
from app.infrastructure.cache.single_flight import SingleFlight

logger = logging.getLogger(__name__)


def ensure_payload(value: object) -> bytes:
    """Return value as immutable bytes; producers must return serialized payloads."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    raise TypeError(
        f"Cache producer must return bytes, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class CacheEntry:
    """Stored payload with the tag versions it was produced under."""

    payload: bytes
    tag_versions: dict[str, int]
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryTagAwareCache:
    """TagAwareCacheProtocol backed by process memory.

    Args:
        default_ttl: Seconds before entries expire when get() gets no ttl; None or 0 = never.
        max_entries: Least recently used entries are evicted beyond this size; None = unbounded.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        default_ttl: int | None = None,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._tag_index: dict[str, set[str]] = {}
        self._tag_versions: dict[str, int] = {}
        self._flights: SingleFlight[bytes] = SingleFlight()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not None

    def is_available(self) -> bool:
        return True

    async def get(
        self,
        key: str,
        tags: Iterable[str],
        producer: Producer,
        ttl: int | None = None,
    ) -> bytes:
        validate_key(key)
        tag_list = normalize_tags(tags)
        entry = self._lookup(key)
        if entry is not None:
            logger.debug("Cache HIT: %s", key)
            return entry.payload
        logger.debug("Cache MISS: %s", key)
        return await self._flights.do(
            key, tag_list, lambda: self._produce(key, tag_list, producer, ttl)
        )

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        tag_list = sorted(set(tags))
        removed = 0
        for tag in tag_list:
            self._tag_versions[tag] = self._tag_versions.get(tag, 0) + 1
            for key in self._tag_index.pop(tag, set()):
                if key in self._entries:
                    self._remove(key)
                    removed += 1
        self._flights.forget_tags(tag_list)
        if tag_list:
            logger.info("Cache INVALIDATE tags=%s (%s keys)", tag_list, removed)
        return removed

    async def delete(self, key: str) -> bool:
        self._flights.forget(key)
        if key not in self._entries:
            return False
        self._remove(key)
        logger.debug("Cache DELETE: %s", key)
        return True

    async def clear(self) -> None:
        for tag in list(self._tag_versions):
            self._tag_versions[tag] += 1
        self._entries.clear()
        self._tag_index.clear()
        self._flights = SingleFlight()
        logger.warning("Cache CLEARED: all keys deleted")

    def _current_versions(self, tags: Iterable[str]) -> dict[str, int]:
        return {tag: self._tag_versions.get(tag, 0) for tag in tags}

    def _is_current(self, tag_versions: dict[str, int]) -> bool:
        return tag_versions == self._current_versions(tag_versions)

    def _lookup(self, key: str) -> CacheEntry | None:
        """Return a live entry (refreshing LRU order) or drop an expired/stale one."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()) or not self._is_current(entry.tag_versions):
            self._remove(key)
            return None
        self._entries.move_to_end(key)
        return entry

    async def _produce(
        self,
        key: str,
        tags: tuple[str, ...],
        producer: Producer,
        ttl: int | None,
    ) -> bytes:
        snapshot = self._current_versions(tags)
        payload = ensure_payload(await producer())
        if self._is_current(snapshot):
            self._store(key, payload, snapshot, ttl)
        else:
            logger.debug("Cache SKIP (tags invalidated during production): %s", key)
        return payload

    def _store(
        self,
        key: str,
        payload: bytes,
        tag_versions: dict[str, int],
        ttl: int | None,
    ) -> None:
        if key in self._entries:
            self._remove(key)
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl else None
        self._entries[key] = CacheEntry(payload, dict(tag_versions), expires_at)
        for tag in tag_versions:
            self._tag_index.setdefault(tag, set()).add(key)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl or "none")
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                oldest = next(iter(self._entries))
                self._remove(oldest)
                logger.debug("Cache EVICT (max_entries=%s): %s", self.max_entries, oldest)

    def _remove(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for tag in entry.tag_versions:
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]
