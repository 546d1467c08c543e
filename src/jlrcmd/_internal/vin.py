"""VIN resolution and VIN-derived defaults."""

from __future__ import annotations

import os


def resolve_vin(*, vin_flag: str | None = None, vin_setting: str | None = None) -> str | None:
    """Resolve VIN from multiple sources in priority order.

    Resolution: --vin flag > settings (JLR_VIN / .env) > JLR_VIN env > None.
    """
    vin = vin_flag or vin_setting
    if not vin:
        vin = os.environ.get("JLR_VIN")
    return vin or None


def fallback_pin(vin: str) -> str:
    """Return the PIN the platform accepts for climate and charging services.

    The InControl app uses the last four characters of the VIN when the
    owner has not set a PIN.  This is a platform convention and offers no
    protection to anyone who can read the VIN off the windscreen.
    """
    return vin[-4:]
