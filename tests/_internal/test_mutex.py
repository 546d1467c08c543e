"""Tests for jlrcmd._internal.mutex: MutexGate."""

from __future__ import annotations

import asyncio

import pytest

from jlrcmd._internal.mutex import MutexGate


async def _spin(times: int = 5) -> None:
    for _ in range(times):
        await asyncio.sleep(0)


class TestAcquire:
    @pytest.mark.asyncio
    async def test_free_gate_is_granted_immediately(self) -> None:
        gate = MutexGate()
        release = await asyncio.wait_for(gate.acquire(), timeout=1)
        assert gate.locked
        release()
        assert not gate.locked

    @pytest.mark.asyncio
    async def test_second_caller_waits_for_release(self) -> None:
        gate = MutexGate(ttl=10)
        release_first = await gate.acquire()

        second = asyncio.create_task(gate.acquire())
        await _spin()
        assert not second.done()

        release_first()
        release_second = await asyncio.wait_for(second, timeout=1)
        assert gate.locked
        release_second()

    @pytest.mark.asyncio
    async def test_critical_sections_do_not_overlap(self) -> None:
        gate = MutexGate(ttl=10)
        inside = 0
        peak = 0

        async def worker() -> None:
            nonlocal inside, peak
            async with gate.hold():
                inside += 1
                peak = max(peak, inside)
                await asyncio.sleep(0.001)
                inside -= 1

        await asyncio.gather(*(worker() for _ in range(8)))
        assert peak == 1


class TestRelease:
    @pytest.mark.asyncio
    async def test_release_is_idempotent(self) -> None:
        gate = MutexGate()
        release = await gate.acquire()
        release()
        release()
        assert not gate.locked

    @pytest.mark.asyncio
    async def test_repeated_release_does_not_free_next_holder(self) -> None:
        gate = MutexGate(ttl=10)
        release_a = await gate.acquire()
        release_a()
        release_b = await gate.acquire()

        release_a()
        assert gate.locked

        third = asyncio.create_task(gate.acquire())
        await _spin()
        assert not third.done()

        release_b()
        (await asyncio.wait_for(third, timeout=1))()

    @pytest.mark.asyncio
    async def test_hold_releases_on_error(self) -> None:
        gate = MutexGate()
        with pytest.raises(RuntimeError):
            async with gate.hold():
                raise RuntimeError("boom")
        assert not gate.locked


class TestTtl:
    @pytest.mark.asyncio
    async def test_expired_holder_is_evicted(self) -> None:
        gate = MutexGate(ttl=0.05)
        await gate.acquire()  # never released

        release = await asyncio.wait_for(gate.acquire(), timeout=1)
        assert gate.locked
        release()

    @pytest.mark.asyncio
    async def test_stale_release_after_eviction_is_ignored(self) -> None:
        gate = MutexGate(ttl=0.05)
        stale = await gate.acquire()
        fresh = await asyncio.wait_for(gate.acquire(ttl=10), timeout=1)

        stale()
        assert gate.locked
        fresh()
        assert not gate.locked

    @pytest.mark.asyncio
    async def test_per_call_ttl_overrides_default(self) -> None:
        gate = MutexGate(ttl=10)
        await gate.acquire(ttl=0.05)

        release = await asyncio.wait_for(gate.acquire(), timeout=1)
        release()

    @pytest.mark.asyncio
    async def test_evicted_lease_is_no_longer_current(self) -> None:
        gate = MutexGate(ttl=0.05)
        stale = await gate.acquire()
        assert stale.is_current

        fresh = await asyncio.wait_for(gate.acquire(ttl=10), timeout=1)
        assert not stale.is_current
        assert fresh.is_current
        fresh.release()
        assert not fresh.is_current

    @pytest.mark.asyncio
    async def test_hold_yields_the_lease(self) -> None:
        gate = MutexGate()
        async with gate.hold() as lease:
            assert lease.is_current
        assert not lease.is_current
