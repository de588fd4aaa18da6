"""Navigation batches.

All route hooks that start within one event loop iteration belong to the same
navigation tick. They register their phrase loads with the tick's batch, and
at most one of them commits a locale change, only after every load in the
batch has settled.
"""

import asyncio
from typing import Any, Awaitable, List, Optional

from route_polyglot.logging import get_module_logger

logger = get_module_logger()


async def _settle(pending: List["asyncio.Future[Any]"]) -> None:
    if pending:
        # asyncio.wait never cancels or re-raises from what it waits on
        await asyncio.wait(pending)


class NavigationBatch:
    """Settlement barrier and commit flag for one navigation tick.

    Attributes:
        committed: True once a hook of this tick has claimed the locale commit.
        sealed: True once the tick is over and no new hooks join the batch.
    """

    def __init__(self) -> None:
        self._pending: List["asyncio.Future[Any]"] = []
        self.committed = False
        self.sealed = False

    def __len__(self) -> int:
        return len(self._pending)

    def register(self, awaitable: Optional[Awaitable[Any]] = None) -> "asyncio.Future[None]":
        """Add a load to the batch.

        Args:
            awaitable: Load to track; None registers nothing but still returns
                an aggregate.

        Returns:
            Future that resolves, never fails, once every load registered up
            to and including this call has settled.
        """
        if awaitable is not None:
            self._pending.append(asyncio.ensure_future(awaitable))
        return asyncio.ensure_future(_settle(list(self._pending)))

    def try_commit(self) -> bool:
        """Claim the locale commit for this tick.

        Returns:
            True for the first caller only.
        """
        if self.committed:
            return False
        self.committed = True
        return True

    async def settled(self) -> None:
        """Wait until every load ever registered in this batch has settled."""
        while True:
            pending = [future for future in self._pending if not future.done()]
            if not pending:
                return
            await _settle(pending)

    def seal(self) -> None:
        self.sealed = True


class NavigationBatcher:
    """Hands out the batch of the current navigation tick.

    A batch stays open for the event loop iteration in which it was created
    and is sealed by a ``call_soon`` callback; the next tick gets a new one.
    Batches of different ticks are not ordered relative to each other.
    """

    def __init__(self) -> None:
        self._current: Optional[NavigationBatch] = None
        self.ticks = 0

    def current(self) -> NavigationBatch:
        """Return the open batch, creating one for this tick if needed."""
        if self._current is None or self._current.sealed:
            batch = NavigationBatch()
            self._current = batch
            self.ticks += 1
            asyncio.get_running_loop().call_soon(batch.seal)
            logger.debug("navigation_batch_opened", tick=self.ticks)
        return self._current
