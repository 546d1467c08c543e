"""Unit conversion helpers shared across the codebase."""

from __future__ import annotations

MIN_TARGET_CELSIUS: float = 15.5
MAX_TARGET_CELSIUS: float = 28.5


def fahrenheit_to_celsius(f: float) -> float:
    """Convert Fahrenheit to Celsius, rounded to 1 decimal place."""
    return round((f - 32.0) * 5.0 / 9.0, 1)


def clamp_target_celsius(c: float) -> float:
    """Clamp a climate target into the range the vehicle accepts."""
    return min(max(c, MIN_TARGET_CELSIUS), MAX_TARGET_CELSIUS)


def celsius_to_tenths(c: float) -> int:
    """Encode Celsius the way the climate service expects it (21.5 -> 215)."""
    return round(c * 10)
