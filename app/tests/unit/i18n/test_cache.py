"""Tests for route_polyglot.i18n.cache module."""

import asyncio

import pytest

from route_polyglot.i18n import CancellationToken, Cancelled, ResourceCache
from tests.factories.i18n import settle


class CountingProducer:
    """Producer that counts calls and can be held open or made to fail."""

    def __init__(self, value=None, error=None):
        self.value = value if value is not None else {"ok": True}
        self.error = error
        self.calls = 0
        self.cancelled = False
        self.gate = None

    def hold(self):
        self.gate = asyncio.Event()
        return self.gate

    async def __call__(self):
        self.calls += 1
        try:
            if self.gate is not None:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.value


@pytest.mark.asyncio
class TestResourceCache:
    """Tests for ResourceCache."""

    async def test_concurrent_callers_share_one_producer(self):
        """Concurrent requests for a key collapse into one producer call."""
        cache = ResourceCache("test")
        producer = CountingProducer()

        first, second = await asyncio.gather(
            cache.get_or_create("k", producer), cache.get_or_create("k", producer)
        )

        assert producer.calls == 1
        assert first is second

    async def test_entry_is_stored_before_producer_completes(self):
        """A key is visible as soon as its producer is scheduled."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        gate = producer.hold()

        task = asyncio.create_task(cache.get_or_create("k", producer))
        await settle()
        assert "k" in cache

        gate.set()
        await task

    async def test_success_stays_cached(self):
        """Resolved entries are returned without calling the producer again."""
        cache = ResourceCache("test")
        producer = CountingProducer()

        await cache.get_or_create("k", producer)
        await cache.get_or_create("k", producer)

        assert producer.calls == 1
        assert cache.keys() == ["k"]
        assert len(cache) == 1

    async def test_failure_evicts_entry(self):
        """A failed producer removes the key so the next call starts fresh."""
        cache = ResourceCache("test")
        failing = CountingProducer(error=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await cache.get_or_create("k", failing)
        assert "k" not in cache

        working = CountingProducer(value={"second": True})
        assert await cache.get_or_create("k", working) == {"second": True}
        assert working.calls == 1

    async def test_failure_is_shared_by_all_waiters(self):
        """Every waiter of a failing entry sees the same error."""
        cache = ResourceCache("test")
        failing = CountingProducer(error=RuntimeError("boom"))

        results = await asyncio.gather(
            cache.get_or_create("k", failing),
            cache.get_or_create("k", failing),
            return_exceptions=True,
        )

        assert failing.calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)

    async def test_cancelled_waiter_leaves_shared_entry_alone(self):
        """One caller cancelling never evicts an entry another caller awaits."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        gate = producer.hold()
        token = CancellationToken()

        cancelled_waiter = asyncio.create_task(cache.get_or_create("k", producer, token))
        patient_waiter = asyncio.create_task(cache.get_or_create("k", producer))
        await settle()

        token.cancel()
        with pytest.raises(Cancelled):
            await cancelled_waiter
        assert "k" in cache
        assert producer.cancelled is False

        gate.set()
        assert await patient_waiter == producer.value
        assert producer.calls == 1

    async def test_last_waiter_leaving_abandons_producer(self):
        """When nobody waits any more the producer is cancelled and the key dropped."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        producer.hold()
        token = CancellationToken()

        waiter = asyncio.create_task(cache.get_or_create("k", producer, token))
        await settle()

        token.cancel()
        with pytest.raises(Cancelled):
            await waiter
        await settle()

        assert "k" not in cache
        assert producer.cancelled is True

    async def test_task_cancellation_of_waiter_abandons_producer(self):
        """Cancelling the caller's own task counts as giving up too."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        producer.hold()

        waiter = asyncio.create_task(cache.get_or_create("k", producer))
        await settle()

        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        await settle()

        assert "k" not in cache
        assert producer.cancelled is True

    async def test_already_cancelled_token_never_calls_producer(self):
        """A token that fired before the call short-circuits it."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        token = CancellationToken()
        token.cancel()

        with pytest.raises(Cancelled):
            await cache.get_or_create("k", producer, token)

        assert producer.calls == 0
        assert "k" not in cache

    async def test_join_waits_for_existing_entry(self):
        """join() attaches to an entry created by get_or_create()."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        gate = producer.hold()

        creator = asyncio.create_task(cache.get_or_create("k", producer))
        await settle()
        joiner = asyncio.create_task(cache.join("k"))
        gate.set()

        assert await joiner is await creator

    async def test_join_missing_key_raises_key_error(self):
        """join() requires an existing entry."""
        cache = ResourceCache("test")
        with pytest.raises(KeyError):
            await cache.join("missing")

    async def test_clear_cancels_in_flight_producers(self):
        """clear() drops every entry and cancels unfinished work."""
        cache = ResourceCache("test")
        producer = CountingProducer()
        producer.hold()

        waiter = asyncio.create_task(cache.get_or_create("k", producer))
        await settle()

        cache.clear()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        assert len(cache) == 0
        assert producer.cancelled is True
