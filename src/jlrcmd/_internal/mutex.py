"""TTL-bounded asyncio mutual exclusion."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL: float = 20.0


class Lease:
    """Ownership of a :class:`MutexGate`, returned by :meth:`MutexGate.acquire`.

    Calling the lease (or :meth:`release`) gives the gate back; repeated
    calls are no-ops.  Once a waiter has evicted an expired holder,
    :attr:`is_current` turns *False* for that holder, which must then stop
    writing whatever state the gate protects.
    """

    def __init__(self, gate: MutexGate) -> None:
        self._gate = gate

    @property
    def is_current(self) -> bool:
        return self._gate._holder is self

    def release(self) -> None:
        self._gate._release(self)

    __call__ = release


class MutexGate:
    """Grant exclusive ownership to one caller at a time.

    A holder keeps the gate until it releases the :class:`Lease` returned by
    :meth:`acquire`, or until *ttl* seconds have passed since it acquired the
    gate.  After that a waiting caller evicts it, so a hung holder can delay
    others by at most one TTL.

    Acquisition never raises; it only suspends.
    """

    def __init__(
        self,
        name: str = "gate",
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._ttl = ttl
        self._clock = clock
        self._holder: Lease | None = None
        self._expires_at = 0.0
        self._freed = asyncio.Event()
        self._freed.set()

    @property
    def locked(self) -> bool:
        """Return *True* if a live (unexpired) lease exists."""
        return self._holder is not None and self._clock() < self._expires_at

    async def acquire(self, ttl: float | None = None) -> Lease:
        """Wait for the gate and return the new :class:`Lease`."""
        lease_ttl = self._ttl if ttl is None else ttl
        while self._holder is not None:
            remaining = self._expires_at - self._clock()
            if remaining <= 0:
                logger.warning("%s held past its TTL; forcing release", self.name)
                self._release(self._holder)
                break
            logger.debug("%s is busy; waiting up to %.1fs", self.name, remaining)
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._freed.wait(), remaining)

        lease = Lease(self)
        self._holder = lease
        self._expires_at = self._clock() + lease_ttl
        self._freed.clear()
        return lease

    @contextlib.asynccontextmanager
    async def hold(self, ttl: float | None = None) -> AsyncIterator[Lease]:
        """Hold the gate for the duration of an ``async with`` block."""
        lease = await self.acquire(ttl)
        try:
            yield lease
        finally:
            lease.release()

    def _release(self, lease: Lease) -> None:
        # A lease that was force-expired must not free its successor.
        if self._holder is not lease:
            return
        self._holder = None
        self._freed.set()
