from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ServiceCode(StrEnum):
    """Service names the command-token endpoint understands."""

    REMOTE_DOOR_LOCK = "RDL"
    REMOTE_DOOR_UNLOCK = "RDU"
    CLIMATE = "ECC"
    CHARGE_PROFILE = "CP"


class CommandToken(BaseModel):
    """A single-use token authorising one remote service call."""

    model_config = ConfigDict(frozen=True)

    token: str
    service: ServiceCode


class DoorOperation(BaseModel):
    """Binds a door command to its endpoint and service code."""

    model_config = ConfigDict(frozen=True)

    name: str
    service: ServiceCode


LOCK = DoorOperation(name="lock", service=ServiceCode.REMOTE_DOOR_LOCK)
UNLOCK = DoorOperation(name="unlock", service=ServiceCode.REMOTE_DOOR_UNLOCK)
