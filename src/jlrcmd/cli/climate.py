"""CLI commands for climate preconditioning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jlrcmd._internal.units import fahrenheit_to_celsius
from jlrcmd.cli._client import execute_command
from jlrcmd.cli._options import invocation_options

if TYPE_CHECKING:
    from jlrcmd.cli.main import AppContext

climate_group = click.Group("climate", help="Climate preconditioning")


@climate_group.command("start")
@click.option("--temp", type=float, default=None, help="Target cabin temperature")
@click.option("--fahrenheit", "-F", is_flag=True, default=False, help="--temp is in °F")
@invocation_options
def start_cmd(app_ctx: AppContext, temp: float | None, fahrenheit: bool) -> None:
    """Start preconditioning (defaults to JLR_TARGET_TEMPERATURE, °C)."""
    if temp is None:
        target = app_ctx.settings.target_temperature
    else:
        target = fahrenheit_to_celsius(temp) if fahrenheit else temp
    execute_command(
        app_ctx,
        "climate.start",
        f"preconditioning to {target:g}°C",
        lambda ic: ic.start_preconditioning(target),
    )


@climate_group.command("stop")
@invocation_options
def stop_cmd(app_ctx: AppContext) -> None:
    """Stop preconditioning."""
    execute_command(
        app_ctx, "climate.stop", "preconditioning stopped", lambda ic: ic.stop_preconditioning()
    )
