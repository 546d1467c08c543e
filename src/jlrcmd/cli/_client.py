"""Shared helpers for building the InControl facade and running commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from jlrcmd._internal.vin import resolve_vin
from jlrcmd.api.errors import ConfigError
from jlrcmd.api.incontrol import InControl

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from jlrcmd.cli.main import AppContext
    from jlrcmd.models.config import AppSettings
    from jlrcmd.models.vehicle import ServiceStatus

T = TypeVar("T")


def require_vin(app_ctx: AppContext, settings: AppSettings) -> str:
    """Resolve VIN or raise :class:`ConfigError`."""
    vin = resolve_vin(vin_flag=app_ctx.vin, vin_setting=settings.vin)
    if not vin:
        raise ConfigError("No VIN specified. Use --vin or set JLR_VIN.")
    return vin


def get_incontrol(app_ctx: AppContext) -> InControl:
    """Build an :class:`InControl` facade from settings and CLI flags."""
    settings = app_ctx.settings
    return InControl.from_settings(settings, vin=require_vin(app_ctx, settings))


def run_with_incontrol(
    app_ctx: AppContext,
    operation: Callable[[InControl], Awaitable[T]],
) -> T:
    """Run *operation* against a fresh facade and close it afterwards."""

    async def _run() -> T:
        async with get_incontrol(app_ctx) as incontrol:
            return await operation(incontrol)

    return asyncio.run(_run())


def execute_command(
    app_ctx: AppContext,
    cmd_name: str,
    action: str,
    operation: Callable[[InControl], Awaitable[ServiceStatus]],
) -> None:
    """Run a remote command and report the service acknowledgement."""
    result = run_with_incontrol(app_ctx, operation)
    app_ctx.formatter.output(result, command=cmd_name, action=action)
