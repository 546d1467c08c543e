"""CLI commands for vehicle reads (status, attributes) and wake."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jlrcmd.cli._client import run_with_incontrol
from jlrcmd.cli._options import invocation_options

if TYPE_CHECKING:
    from jlrcmd.cli.main import AppContext

vehicle_group = click.Group("vehicle", help="Vehicle status and wake-up")


@vehicle_group.command("status")
@click.option("--raw", is_flag=True, default=False, help="Show every status key")
@invocation_options
def status_cmd(app_ctx: AppContext, raw: bool) -> None:
    """Show battery, charging, lock and climate state (does not wake the car)."""
    status = run_with_incontrol(app_ctx, lambda incontrol: incontrol.get_vehicle_status())
    formatter = app_ctx.formatter

    if formatter.format == "json":
        formatter.output(status, command="vehicle.status")
        return
    formatter.rich.vehicle_status(
        status, low_battery_threshold=app_ctx.settings.low_battery_threshold
    )
    if raw:
        formatter.rich.status_entries(status)


@vehicle_group.command("attributes")
@invocation_options
def attributes_cmd(app_ctx: AppContext) -> None:
    """Show brand, model, nickname and registration."""
    attrs = run_with_incontrol(app_ctx, lambda incontrol: incontrol.get_vehicle_attributes())
    app_ctx.formatter.output(attrs, command="vehicle.attributes")


@vehicle_group.command("wake")
@invocation_options
def wake_cmd(app_ctx: AppContext) -> None:
    """Wake the vehicle and wait until it reports online."""
    vehicle = run_with_incontrol(app_ctx, lambda incontrol: incontrol.wake_up())
    app_ctx.formatter.output(vehicle, command="vehicle.wake")
