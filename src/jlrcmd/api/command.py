"""Remote vehicle commands and the PIN-authorised tokens they require."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jlrcmd._internal.units import celsius_to_tenths
from jlrcmd._internal.vin import fallback_pin
from jlrcmd.api.errors import ApiError, ConfigError
from jlrcmd.models.auth import IF9_BASE_URL
from jlrcmd.models.command import LOCK, UNLOCK, CommandToken, DoorOperation, ServiceCode
from jlrcmd.models.vehicle import ServiceStatus

if TYPE_CHECKING:
    from jlrcmd.api.client import InControlClient
    from jlrcmd.auth.session import SessionManager

logger = logging.getLogger(__name__)

AUTHENTICATE_CONTENT_TYPE = (
    "application/vnd.wirelesscar.ngtp.if9.AuthenticateRequest-v2+json; charset=utf-8"
)
DOOR_CONTENT_TYPE = "application/vnd.wirelesscar.ngtp.if9.StartServiceConfiguration-v2+json"
DOOR_ACCEPT = "application/vnd.wirelesscar.ngtp.if9.ServiceStatus-v4+json"
PHEV_CONTENT_TYPE = "application/vnd.wirelesscar.ngtp.if9.PhevService-v1+json; charset=utf-8"
PHEV_ACCEPT = "application/vnd.wirelesscar.ngtp.if9.ServiceStatus-v5+json"


class CommandTokenIssuer:
    """Obtain a fresh single-use token for one remote service call."""

    def __init__(self, client: InControlClient, sessions: SessionManager, vin: str) -> None:
        self._client = client
        self._sessions = sessions
        self._vin = vin

    async def get_command_token(self, service: ServiceCode, pin: str) -> CommandToken:
        session = await self._sessions.get_session()
        logger.debug("Requesting %s command token for %s", service.value, self._vin)
        data = await self._client.post(
            f"{IF9_BASE_URL}/vehicles/{self._vin}/users/{session.user_id}/authenticate",
            bearer=session.access_token,
            headers={"Content-Type": AUTHENTICATE_CONTENT_TYPE},
            json={"serviceName": service.value, "pin": pin},
        )
        token = data.get("token")
        if not token:
            raise ApiError(f"No {service.value} command token in response")
        return CommandToken(token=token, service=service)


class CommandAPI:
    """Door, climate and charging commands for one VIN.

    Every call requests its own command token and sends exactly one
    command.  Commands are fire-and-forget: the returned
    :class:`ServiceStatus` only acknowledges that the service was started.
    """

    def __init__(
        self,
        client: InControlClient,
        sessions: SessionManager,
        vin: str,
        *,
        pin: str | None = None,
        issuer: CommandTokenIssuer | None = None,
    ) -> None:
        self._client = client
        self._sessions = sessions
        self._vin = vin
        self._pin = pin
        self._issuer = issuer or CommandTokenIssuer(client, sessions, vin)

    @property
    def _phev_pin(self) -> str:
        return self._pin or fallback_pin(self._vin)

    # ------------------------------------------------------------------
    # Doors
    # ------------------------------------------------------------------

    async def lock(self) -> ServiceStatus:
        return await self._door(LOCK)

    async def unlock(self) -> ServiceStatus:
        return await self._door(UNLOCK)

    async def _door(self, op: DoorOperation) -> ServiceStatus:
        if not self._pin:
            raise ConfigError(f"A PIN is required to {op.name} the vehicle. Set JLR_PIN.")
        token = await self._issuer.get_command_token(op.service, self._pin)
        logger.info("Sending %s to %s", op.name, self._vin)
        return await self._send(
            op.name,
            {"token": token.token},
            content_type=DOOR_CONTENT_TYPE,
            accept=DOOR_ACCEPT,
        )

    # ------------------------------------------------------------------
    # Climate
    # ------------------------------------------------------------------

    async def start_preconditioning(self, target_celsius: float) -> ServiceStatus:
        return await self._phev(
            "preconditioning",
            ServiceCode.CLIMATE,
            {
                "PRECONDITIONING": "START",
                "TARGET_TEMPERATURE_CELSIUS": str(celsius_to_tenths(target_celsius)),
            },
        )

    async def stop_preconditioning(self) -> ServiceStatus:
        return await self._phev(
            "preconditioning", ServiceCode.CLIMATE, {"PRECONDITIONING": "STOP"}
        )

    # ------------------------------------------------------------------
    # Charging
    # ------------------------------------------------------------------

    async def start_charging(self) -> ServiceStatus:
        return await self._phev(
            "chargeProfile", ServiceCode.CHARGE_PROFILE, {"CHARGE_NOW_SETTING": "FORCE_ON"}
        )

    async def stop_charging(self) -> ServiceStatus:
        return await self._phev(
            "chargeProfile", ServiceCode.CHARGE_PROFILE, {"CHARGE_NOW_SETTING": "FORCE_OFF"}
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _phev(
        self, endpoint: str, service: ServiceCode, parameters: dict[str, str]
    ) -> ServiceStatus:
        token = await self._issuer.get_command_token(service, self._phev_pin)
        logger.info("Sending %s %s to %s", endpoint, parameters, self._vin)
        return await self._send(
            endpoint,
            {
                "token": token.token,
                "serviceParameters": [{"key": k, "value": v} for k, v in parameters.items()],
            },
            content_type=PHEV_CONTENT_TYPE,
            accept=PHEV_ACCEPT,
        )

    async def _send(
        self, endpoint: str, body: dict[str, Any], *, content_type: str, accept: str
    ) -> ServiceStatus:
        session = await self._sessions.get_session()
        data = await self._client.post(
            f"{IF9_BASE_URL}/vehicles/{self._vin}/{endpoint}",
            bearer=session.access_token,
            headers={"Content-Type": content_type, "Accept": accept},
            json=body,
        )
        return ServiceStatus.model_validate(data)
