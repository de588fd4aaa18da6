"""Load-once cache of shared in-flight work.

Each key maps to a single producer task. Concurrent callers for the same key
join that task instead of starting their own, failures evict the key so the
next caller starts over, and successes stay cached for the session.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

from route_polyglot.i18n.cancellation import CancellationToken
from route_polyglot.i18n.errors import Cancelled
from route_polyglot.logging import get_module_logger

logger = get_module_logger()

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _CacheEntry(Generic[V]):
    """Producer task for one key plus the number of callers awaiting it."""

    def __init__(self) -> None:
        self.task: Optional["asyncio.Task[V]"] = None
        self.waiters = 0

    async def wait(self, token: Optional[CancellationToken]) -> V:
        assert self.task is not None
        self.waiters += 1
        try:
            if token is None:
                # shield so that cancelling this caller leaves the task running
                return await asyncio.shield(self.task)

            token_fired = asyncio.ensure_future(token.wait())
            try:
                await asyncio.wait(
                    {self.task, token_fired}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                token_fired.cancel()

            if self.task.done():
                return self.task.result()
            raise Cancelled("Load cancelled by caller")
        finally:
            self.waiters -= 1


class ResourceCache(Generic[K, V]):
    """Deduplicating cache of producer tasks, keyed by ``K``.

    The first caller for a key supplies the producer; every later caller gets
    the same result. The producer runs as a task owned by the cache, so one
    caller giving up never fails it for the others. When the last caller of
    an unfinished entry gives up, the task is cancelled and the key dropped.

    This is a load-once cache: nothing successful is ever evicted.

    Attributes:
        name: Label used in log events (e.g., "indexes", "phrases").
    """

    def __init__(self, name: str = "resources") -> None:
        self.name = name
        self._entries: Dict[K, _CacheEntry[V]] = {}
        self.log = logger.bind(cache=name)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[K]:
        return list(self._entries)

    async def get_or_create(
        self,
        key: K,
        producer: Callable[[], Awaitable[V]],
        token: Optional[CancellationToken] = None,
    ) -> V:
        """Return the value for ``key``, running ``producer`` only if no entry exists.

        Args:
            key: Cache key.
            producer: Zero-argument coroutine function computing the value.
                Only called when the key has no entry.
            token: Caller's cancellation token.

        Returns:
            The producer's result, shared by every caller of this key.

        Raises:
            Cancelled: If ``token`` fires before the value is available.
            Exception: Whatever the producer raised; the key is evicted first.
        """
        if token is not None:
            token.raise_if_cancelled()

        entry = self._entries.get(key)
        if entry is None:
            entry = _CacheEntry()
            # stored before the producer runs so concurrent callers dedupe
            self._entries[key] = entry
            entry.task = asyncio.ensure_future(self._produce(key, entry, producer))
            self.log.debug("cache_entry_created", key=str(key))
        else:
            self.log.debug("cache_entry_joined", key=str(key))

        return await self._wait(key, entry, token)

    async def join(self, key: K, token: Optional[CancellationToken] = None) -> V:
        """Wait for the existing entry of ``key``.

        Raises:
            KeyError: If ``key`` has no entry.
            Cancelled: If ``token`` fires before the value is available.
        """
        if token is not None:
            token.raise_if_cancelled()
        return await self._wait(key, self._entries[key], token)

    def clear(self) -> None:
        """Drop every entry, cancelling producers still in flight."""
        for entry in self._entries.values():
            if entry.task is not None and not entry.task.done():
                entry.task.cancel()
        self._entries.clear()
        self.log.info("cleared_resource_cache")

    async def _produce(
        self, key: K, entry: _CacheEntry[V], producer: Callable[[], Awaitable[V]]
    ) -> V:
        try:
            return await producer()
        except BaseException:
            # only evict our own entry; the key may already hold a fresh one
            if self._entries.get(key) is entry:
                del self._entries[key]
                self.log.debug("cache_entry_evicted", key=str(key))
            raise

    async def _wait(
        self, key: K, entry: _CacheEntry[V], token: Optional[CancellationToken]
    ) -> V:
        try:
            return await entry.wait(token)
        except (Cancelled, asyncio.CancelledError):
            if entry.waiters == 0 and entry.task is not None and not entry.task.done():
                self._abandon(key, entry)
            raise

    def _abandon(self, key: K, entry: _CacheEntry[V]) -> None:
        if self._entries.get(key) is entry:
            del self._entries[key]
        assert entry.task is not None
        entry.task.cancel()
        self.log.info("cache_entry_abandoned", key=str(key))
