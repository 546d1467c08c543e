from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_EXTRA_ALLOW = ConfigDict(extra="allow")
_CAMEL = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)


class Vehicle(BaseModel):
    model_config = _EXTRA_ALLOW

    vin: str
    display_name: str | None = None
    state: str = "unknown"

    @property
    def is_online(self) -> bool:
        return self.state == "online"


class VehicleAttributes(BaseModel):
    """Static vehicle description returned by ``/vehicles/{vin}/attributes``."""

    model_config = _CAMEL

    vehicle_brand: str | None = None
    vehicle_type: str | None = None
    nickname: str | None = None
    registration_number: str | None = None
    vehicle_type_code: str | None = None
    model_year: int | None = None
    fuel_type: str | None = None


class ServiceStatus(BaseModel):
    """Acknowledgement returned when a remote service is started."""

    model_config = _CAMEL

    status: str | None = None
    service_type: str | None = None
    customer_service_id: str | None = None


class KeyValue(BaseModel):
    key: str
    value: Any = None


class VehicleStatus(BaseModel):
    """Point-in-time telemetry snapshot keyed by status name.

    Built from the ``vehicleStatus`` key/value list; when a key repeats the
    later entry wins.
    """

    entries: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[KeyValue | Mapping[str, Any]]) -> VehicleStatus:
        entries: dict[str, Any] = {}
        for pair in pairs:
            kv = pair if isinstance(pair, KeyValue) else KeyValue.model_validate(pair)
            entries[kv.key] = kv.value
        return cls(entries=entries)

    # -- mapping protocol ----------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self.entries.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self.entries.get(key, default)

    # -- interpreted fields --------------------------------------------------

    @property
    def battery_level(self) -> int | None:
        raw = self.entries.get("EV_STATE_OF_CHARGE")
        if raw is None or raw == "":
            return None
        return int(float(raw))

    @property
    def is_charging(self) -> bool:
        return self.entries.get("EV_CHARGING_STATUS") == "CHARGING"

    @property
    def is_plugged_in(self) -> bool:
        """True when a charging cable is connected."""
        return self.entries.get("EV_CHARGING_METHOD") == "WIRED"

    @property
    def doors_locked(self) -> bool:
        return _truthy(self.entries.get("DOOR_IS_ALL_DOORS_LOCKED"))

    @property
    def climate_active(self) -> bool:
        return self.entries.get("CLIMATE_STATUS_OPERATING_STATUS") == "HEATING"

    def is_battery_low(self, threshold: int) -> bool:
        level = self.battery_level
        return level is not None and level < threshold


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.upper() == "TRUE"
    return bool(value)
