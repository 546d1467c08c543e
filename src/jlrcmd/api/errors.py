"""Exception hierarchy for InControl API and session failures."""

from __future__ import annotations


class JLRError(Exception):
    """Base class for all jlrcmd errors."""


class ApiError(JLRError):
    """A request to the InControl API failed (transport error or non-2xx)."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(ApiError):
    """Credentials were rejected or the login sequence could not complete."""


class VehicleNotFoundError(ApiError):
    """The configured VIN is unknown to the account."""


class ConfigError(JLRError):
    """Required configuration (credentials, device id, VIN) is missing."""


class WakeUpTimeoutError(JLRError):
    """The vehicle did not report ``online`` before the wake-up deadline."""

    def __init__(self, deadline_minutes: float, elapsed_ms: float) -> None:
        super().__init__(
            f"Vehicle did not wake within {deadline_minutes:g} minute(s)"
            f" (gave up after {elapsed_ms / 1000:.1f}s)."
        )
        self.deadline_minutes = deadline_minutes
        self.elapsed_ms = elapsed_ms


class ChargerNotConnectedError(JLRError):
    """Charging was requested while no cable is plugged in."""
