"""JSON envelopes for ``--format json``.

Every command prints exactly one object::

    {"ok": true,  "command": "charge.start", "data": {...},  "timestamp": "..."}
    {"ok": false, "command": "charge.start", "error": {...}, "timestamp": "..."}
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from jlrcmd.models.vehicle import ServiceStatus, Vehicle, VehicleAttributes, VehicleStatus

# Models whose JSON keys should match the camelCase names InControl sends.
_WIRE_NAMED = (ServiceStatus, VehicleAttributes)


def _serialize(obj: Any) -> Any:
    if isinstance(obj, VehicleStatus):
        # Flat "KEY": "value" mapping, as reported by the vehicle.
        return dict(obj.entries)
    if isinstance(obj, Vehicle):
        return {**obj.model_dump(mode="json", exclude_none=True), "online": obj.is_online}
    if isinstance(obj, _WIRE_NAMED):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", exclude_none=True)
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {key: _serialize(value) for key, value in obj.items()}
    return obj


def _envelope(command: str, *, ok: bool, **body: Any) -> str:
    doc = {"ok": ok, "command": command, **body, "timestamp": datetime.now(UTC).isoformat()}
    return json.dumps(doc, indent=2, default=str)


def format_json_response(*, data: Any, command: str) -> str:
    return _envelope(command, ok=True, data=_serialize(data))


def format_json_error(*, code: str, message: str, command: str, **extra: Any) -> str:
    """Error envelope; *extra* keys are added next to ``code`` and ``message``."""
    return _envelope(command, ok=False, error={"code": code, "message": message, **extra})
