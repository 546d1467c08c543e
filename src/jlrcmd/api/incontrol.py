"""One object per configured vehicle: the surface bridges and the CLI call into."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jlrcmd._internal.units import clamp_target_celsius
from jlrcmd.api.client import InControlClient
from jlrcmd.api.command import CommandAPI
from jlrcmd.api.errors import ChargerNotConnectedError, ConfigError
from jlrcmd.api.vehicle import VehicleAPI
from jlrcmd.api.wake import WakeUpPoller
from jlrcmd.auth.session import SessionManager

if TYPE_CHECKING:
    from types import TracebackType

    from jlrcmd.models.config import AppSettings
    from jlrcmd.models.vehicle import ServiceStatus, Vehicle, VehicleAttributes, VehicleStatus

logger = logging.getLogger(__name__)


class InControl:
    """Status reads and remote commands for a single vehicle.

    Reads never wake the vehicle.  When *wake_before_commands* is set,
    each command first waits (up to *wait_minutes*) for the vehicle to come
    online, so a :class:`~jlrcmd.api.errors.WakeUpTimeoutError` blocks the
    command while reads stay available.
    """

    def __init__(
        self,
        client: InControlClient,
        *,
        username: str,
        password: str,
        vin: str,
        pin: str | None = None,
        wait_minutes: float = 1,
        wake_before_commands: bool = True,
        sessions: SessionManager | None = None,
        poller: WakeUpPoller | None = None,
    ) -> None:
        self.vin = vin
        self.wait_minutes = wait_minutes
        self.wake_before_commands = wake_before_commands
        self._client = client
        self.sessions = sessions or SessionManager(client, username, password)
        self.vehicles = VehicleAPI(client, self.sessions, vin)
        self.commands = CommandAPI(client, self.sessions, vin, pin=pin)
        self._poller = poller or WakeUpPoller(self.vehicles)

    @classmethod
    def from_settings(cls, settings: AppSettings, *, vin: str | None = None) -> InControl:
        """Build from :class:`AppSettings`, raising :class:`ConfigError` on gaps."""
        resolved_vin = vin or settings.vin
        missing = [
            name
            for name, value in (
                ("JLR_USERNAME", settings.username),
                ("JLR_PASSWORD", settings.password),
                ("JLR_DEVICE_ID", settings.device_id),
                ("JLR_VIN", resolved_vin),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing configuration: {', '.join(missing)}")
        assert settings.username is not None
        assert settings.password is not None
        assert settings.device_id is not None
        assert resolved_vin is not None

        client = InControlClient(settings.device_id, timeout=settings.timeout)
        return cls(
            client,
            username=settings.username,
            password=settings.password,
            vin=resolved_vin,
            pin=settings.pin,
            wait_minutes=settings.wait_minutes,
            wake_before_commands=settings.wake_before_commands,
        )

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> InControl:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_vehicle_status(self) -> VehicleStatus:
        return await self.vehicles.get_vehicle_status()

    async def get_vehicle_attributes(self) -> VehicleAttributes:
        return await self.vehicles.get_vehicle_attributes()

    async def wake_up(self) -> Vehicle:
        return await self._poller.wake_up(self.wait_minutes)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def lock_vehicle(self) -> ServiceStatus:
        await self._ensure_awake()
        return await self.commands.lock()

    async def unlock_vehicle(self) -> ServiceStatus:
        await self._ensure_awake()
        return await self.commands.unlock()

    async def start_preconditioning(self, target_temperature: float) -> ServiceStatus:
        target = clamp_target_celsius(target_temperature)
        if target != target_temperature:
            logger.info("Clamped climate target %.1f to %.1f", target_temperature, target)
        await self._ensure_awake()
        return await self.commands.start_preconditioning(target)

    async def stop_preconditioning(self) -> ServiceStatus:
        await self._ensure_awake()
        return await self.commands.stop_preconditioning()

    async def start_charging(self) -> ServiceStatus:
        """Force charging on; refused without sending anything if unplugged."""
        status = await self.vehicles.get_vehicle_status()
        if not status.is_plugged_in:
            method = status.get("EV_CHARGING_METHOD") or "unknown"
            raise ChargerNotConnectedError(
                f"Charging cable is not connected (charging method: {method})"
            )
        await self._ensure_awake()
        return await self.commands.start_charging()

    async def stop_charging(self) -> ServiceStatus:
        await self._ensure_awake()
        return await self.commands.stop_charging()

    async def _ensure_awake(self) -> None:
        if self.wake_before_commands:
            await self.wake_up()
