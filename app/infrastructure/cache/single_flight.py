"""Per-key single-flight for cache productions.

The first caller for a missing key becomes the leader and runs the
production; callers arriving while it runs await the leader's future instead
of producing again. State is a plain dict mutated only between awaits, so the
event loop serializes access and unrelated keys never wait on each other.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def _consume_outcome(future: asyncio.Future) -> None:
    """Mark a failed future's exception as retrieved (no followers may be waiting)."""
    if not future.cancelled():
        future.exception()


@dataclass
class _Call(Generic[T]):
    future: asyncio.Future[T]
    tags: frozenset[str]


class SingleFlight(Generic[T]):
    """Deduplicate concurrent productions of the same key within one event loop."""

    def __init__(self) -> None:
        self._calls: dict[str, _Call[T]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._calls

    def __len__(self) -> int:
        return len(self._calls)

    async def do(
        self,
        key: str,
        tags: Iterable[str],
        fn: Callable[[], Awaitable[T]],
    ) -> T:
        """Run fn for key unless a production is already in flight; share its outcome.

        Failures of the leader are forwarded to every follower. A follower being
        cancelled does not cancel the shared production; a leader being cancelled
        does not cancel its followers, which retry with a production of their own.
        """
        while (call := self._calls.get(key)) is not None:
            try:
                return await asyncio.shield(call.future)
            except asyncio.CancelledError:
                # Only the leader was cancelled: lead or join the next production.
                if call.future.cancelled() and not asyncio.current_task().cancelling():
                    continue
                raise

        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        future.add_done_callback(_consume_outcome)
        call = _Call(future=future, tags=frozenset(tags))
        self._calls[key] = call
        try:
            result = await fn()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            # forget_tags may already have detached this call
            if self._calls.get(key) is call:
                del self._calls[key]

    def forget(self, key: str) -> None:
        """Detach the in-flight production of key; later callers start a new one."""
        self._calls.pop(key, None)

    def forget_tags(self, tags: Iterable[str]) -> int:
        """Detach every in-flight production indexed under any of tags."""
        wanted = frozenset(tags)
        stale = [key for key, call in self._calls.items() if call.tags & wanted]
        for key in stale:
            del self._calls[key]
        return len(stale)
