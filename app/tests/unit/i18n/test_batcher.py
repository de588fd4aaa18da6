"""Tests for route_polyglot.i18n.batcher module."""

import asyncio

import pytest

from route_polyglot.i18n import NavigationBatch, NavigationBatcher
from tests.factories.i18n import settle


async def _resolve_after(gate, value="ok"):
    await gate.wait()
    return value


async def _reject_after(gate):
    await gate.wait()
    raise RuntimeError("load failed")


@pytest.mark.asyncio
class TestNavigationBatch:
    """Tests for NavigationBatch."""

    async def test_register_none_resolves_immediately(self):
        batch = NavigationBatch()

        await asyncio.wait_for(batch.register(None), timeout=1)
        assert len(batch) == 0

    async def test_aggregate_waits_for_everything_registered_so_far(self):
        """An aggregate settles only after all earlier registrations settle."""
        batch = NavigationBatch()
        first_gate, second_gate = asyncio.Event(), asyncio.Event()

        batch.register(_resolve_after(first_gate))
        aggregate = batch.register(_resolve_after(second_gate))

        first_gate.set()
        await settle()
        assert not aggregate.done()

        second_gate.set()
        await asyncio.wait_for(aggregate, timeout=1)

    async def test_aggregate_excludes_later_registrations(self):
        """Registrations after a call are not part of that call's aggregate."""
        batch = NavigationBatch()
        early_gate, late_gate = asyncio.Event(), asyncio.Event()

        early = batch.register(_resolve_after(early_gate))
        batch.register(_resolve_after(late_gate))

        early_gate.set()
        await asyncio.wait_for(early, timeout=1)
        late_gate.set()
        await batch.settled()

    async def test_aggregate_swallows_failures(self):
        """A rejected load settles the aggregate successfully."""
        batch = NavigationBatch()
        gate = asyncio.Event()

        aggregate = batch.register(_reject_after(gate))
        gate.set()

        assert await aggregate is None

    async def test_try_commit_only_first_wins(self):
        batch = NavigationBatch()

        assert batch.try_commit() is True
        assert batch.try_commit() is False
        assert batch.committed is True

    async def test_settled_waits_for_registrations_made_while_waiting(self):
        """settled() keeps waiting when the batch grows."""
        batch = NavigationBatch()
        first_gate, second_gate = asyncio.Event(), asyncio.Event()
        batch.register(_resolve_after(first_gate))

        waiter = asyncio.create_task(batch.settled())
        await settle()
        batch.register(_resolve_after(second_gate))
        first_gate.set()
        await settle()
        assert not waiter.done()

        second_gate.set()
        await asyncio.wait_for(waiter, timeout=1)

    async def test_single_commit_after_all_loads_settle(self):
        """Two hooks want to commit; only the first does, after P1 and P2 settle."""
        batch = NavigationBatch()
        p1_gate, p2_gate = asyncio.Event(), asyncio.Event()
        events = []

        async def hook(name, load, own_work_gate):
            aggregate = batch.register(load)
            await own_work_gate.wait()
            if batch.try_commit():
                await aggregate
                await batch.settled()
                events.append(f"{name}:commit")
            else:
                await aggregate
                events.append(f"{name}:no-commit")

        hook1_work, hook2_work = asyncio.Event(), asyncio.Event()
        hooks = asyncio.gather(
            hook("first", _resolve_after(p1_gate), hook1_work),
            hook("second", _reject_after(p2_gate), hook2_work),
        )
        await settle()

        hook1_work.set()
        await settle()
        hook2_work.set()
        p1_gate.set()
        await settle()
        assert "first:commit" not in events

        p2_gate.set()
        await asyncio.wait_for(hooks, timeout=1)

        assert events.count("first:commit") == 1
        assert "second:no-commit" in events
        assert not any(e.startswith("second:commit") for e in events)


@pytest.mark.asyncio
class TestNavigationBatcher:
    """Tests for NavigationBatcher."""

    async def test_same_tick_shares_batch(self):
        batcher = NavigationBatcher()

        assert batcher.current() is batcher.current()
        assert batcher.ticks == 1

    async def test_hooks_started_together_share_batch(self):
        """Tasks started in one gather land in the same batch."""
        batcher = NavigationBatcher()
        seen = []

        async def hook():
            seen.append(batcher.current())

        await asyncio.gather(hook(), hook(), hook())

        assert len(seen) == 3
        assert seen[0] is seen[1] is seen[2]

    async def test_next_tick_gets_fresh_batch(self):
        """A batch is sealed at the end of its tick."""
        batcher = NavigationBatcher()
        first = batcher.current()
        first.try_commit()

        await settle()
        second = batcher.current()

        assert first.sealed is True
        assert second is not first
        assert second.committed is False
        assert batcher.ticks == 2
