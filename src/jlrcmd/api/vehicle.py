"""Vehicle state reads: status snapshot, attributes, online state and wake."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from jlrcmd.models.auth import IF9_BASE_URL
from jlrcmd.models.vehicle import Vehicle, VehicleAttributes, VehicleStatus

if TYPE_CHECKING:
    from jlrcmd.api.client import InControlClient
    from jlrcmd.auth.session import SessionManager

logger = logging.getLogger(__name__)


class VehicleResource(StrEnum):
    """Vehicle information resources, each with its own ``Accept`` type.

    ``VehicleResource("bogus")`` raises :class:`ValueError`, so an unknown
    resource name never reaches the wire.
    """

    STATUS = "status"
    ATTRIBUTES = "attributes"

    @property
    def accept(self) -> str:
        return _RESOURCE_ACCEPT[self]


_RESOURCE_ACCEPT: dict[VehicleResource, str] = {
    VehicleResource.STATUS: "application/vnd.ngtp.org.if9.healthstatus-v2+json",
    VehicleResource.ATTRIBUTES: "application/vnd.ngtp.org.VehicleAttributes-v3+json",
}


class VehicleAPI:
    """Read-only vehicle operations for one VIN (composition over InControlClient)."""

    def __init__(self, client: InControlClient, sessions: SessionManager, vin: str) -> None:
        self._client = client
        self._sessions = sessions
        self.vin = vin

    async def get_information(self, resource: VehicleResource | str) -> dict[str, Any]:
        """Fetch a raw vehicle information resource."""
        res = VehicleResource(resource)
        session = await self._sessions.get_session()
        logger.debug("Fetching vehicle %s for %s", res.value, self.vin)
        return await self._client.get(
            f"{IF9_BASE_URL}/vehicles/{self.vin}/{res.value}",
            bearer=session.access_token,
            headers={"Accept": res.accept},
        )

    async def get_vehicle_status(self) -> VehicleStatus:
        """Return the latest telemetry snapshot; does not wake the vehicle."""
        data = await self.get_information(VehicleResource.STATUS)
        return VehicleStatus.from_pairs(data.get("vehicleStatus", []))

    async def get_vehicle_attributes(self) -> VehicleAttributes:
        data = await self.get_information(VehicleResource.ATTRIBUTES)
        return VehicleAttributes.model_validate(data)

    async def get_vehicle(self) -> Vehicle:
        """Fetch the vehicle's current online/asleep state."""
        session = await self._sessions.get_session()
        data = await self._client.get(
            f"{IF9_BASE_URL}/vehicles/{self.vin}",
            bearer=session.access_token,
        )
        return Vehicle.model_validate({"vin": self.vin, **data})

    async def wake(self) -> None:
        """Ask the vehicle to come online.  The response carries no state guarantee."""
        session = await self._sessions.get_session()
        logger.info("Sending wake-up to %s", self.vin)
        await self._client.post(
            f"{IF9_BASE_URL}/vehicles/{self.vin}/wake_up",
            bearer=session.access_token,
        )
