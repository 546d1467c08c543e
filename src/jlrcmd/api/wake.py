"""Wake the vehicle and poll until it reports online."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from jlrcmd.api.errors import WakeUpTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from jlrcmd.api.vehicle import VehicleAPI
    from jlrcmd.models.vehicle import Vehicle

logger = logging.getLogger(__name__)

# The API has no wake-complete notification, so we poll.
_WAKE_INITIAL_WAIT_MS = 1000
_WAKE_MAX_WAIT_MS = 5000
_WAKE_BACKOFF_FACTOR = 2


class WakeUpPoller:
    """Send a wake command, then poll the vehicle state with exponential backoff.

    Waits between polls are 1s, 2s, 4s, then 5s until the vehicle is
    online or the deadline passes.  Only the state query is repeated; the
    wake command is sent once.
    """

    def __init__(
        self,
        vehicle_api: VehicleAPI,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._vehicle_api = vehicle_api
        self._sleep = sleep
        self._clock = clock

    async def wake_up(self, deadline_minutes: float = 1) -> Vehicle:
        """Return the online vehicle or raise :class:`WakeUpTimeoutError`."""
        deadline_ms = deadline_minutes * 60 * 1000
        await self._vehicle_api.wake()

        start = self._clock()
        wait_ms = _WAKE_INITIAL_WAIT_MS
        while True:
            vehicle = await self._vehicle_api.get_vehicle()
            if vehicle.is_online:
                logger.info("%s is online", vehicle.vin)
                return vehicle

            elapsed_ms = (self._clock() - start) * 1000
            if elapsed_ms > deadline_ms:
                raise WakeUpTimeoutError(deadline_minutes, elapsed_ms)

            logger.debug(
                "%s is %s; checking again in %dms", vehicle.vin, vehicle.state, wait_ms
            )
            await self._sleep(wait_ms / 1000)
            wait_ms = min(wait_ms * _WAKE_BACKOFF_FACTOR, _WAKE_MAX_WAIT_MS)
