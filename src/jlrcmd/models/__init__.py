from __future__ import annotations

from jlrcmd.models.auth import (
    CLIENT_BASIC_AUTH,
    IF9_BASE_URL,
    IFAS_BASE_URL,
    IFOP_BASE_URL,
    TOKEN_URL,
    Session,
    SessionState,
    TokenData,
)
from jlrcmd.models.command import LOCK, UNLOCK, CommandToken, DoorOperation, ServiceCode
from jlrcmd.models.config import AppSettings
from jlrcmd.models.vehicle import (
    KeyValue,
    ServiceStatus,
    Vehicle,
    VehicleAttributes,
    VehicleStatus,
)

__all__ = [
    # auth
    "CLIENT_BASIC_AUTH",
    "IF9_BASE_URL",
    "IFAS_BASE_URL",
    "IFOP_BASE_URL",
    "TOKEN_URL",
    "Session",
    "SessionState",
    "TokenData",
    # command
    "LOCK",
    "UNLOCK",
    "CommandToken",
    "DoorOperation",
    "ServiceCode",
    # config
    "AppSettings",
    # vehicle
    "KeyValue",
    "ServiceStatus",
    "Vehicle",
    "VehicleAttributes",
    "VehicleStatus",
]
