"""Cooperative cancellation tokens.

A token belongs to one caller (typically one navigation). Firing it makes
that caller stop waiting; work shared with other callers is unaffected.
"""

import asyncio

from route_polyglot.i18n.errors import Cancelled


class CancellationToken:
    """Caller-supplied signal that a pending operation is no longer needed.

    Usage:
        token = CancellationToken()
        task = asyncio.create_task(session.load(["common"], token))
        ...
        token.cancel()  # the navigation was superseded
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Fire the token. Calling it again is a no-op."""
        self._event.set()

    async def wait(self) -> None:
        """Suspend until the token fires."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise Cancelled("Operation cancelled")
