"""Cache protocol for the read-through, tag-invalidated cache (DIP).

Use cases depend on this protocol; InMemoryTagAwareCache and
RedisTagAwareCache implement it.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

Producer = Callable[[], Awaitable[bytes]]


class TagAwareCacheProtocol(Protocol):
    """Read-through cache whose entries are grouped under tags for batch invalidation."""

    def is_available(self) -> bool:
        """Return True if the backend is connected and usable."""
        ...

    async def get(
        self,
        key: str,
        tags: Iterable[str],
        producer: Producer,
        ttl: int | None = None,
    ) -> bytes:
        """Return the payload stored under key, producing and storing it on a miss.

        The producer runs at most once per miss across concurrent callers of the
        same key. If it raises, nothing is stored and the error propagates.
        """
        ...

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        """Remove every entry indexed under any of tags. Returns entries removed."""
        ...

    async def delete(self, key: str) -> bool:
        """Evict a single key. Returns True if it was present."""
        ...

    async def clear(self) -> None:
        """Drop every entry, tag index and tag version."""
        ...
