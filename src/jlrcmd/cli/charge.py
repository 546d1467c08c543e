"""CLI commands for charging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jlrcmd.cli._client import execute_command
from jlrcmd.cli._options import invocation_options

if TYPE_CHECKING:
    from jlrcmd.cli.main import AppContext

charge_group = click.Group("charge", help="Charging commands")


@charge_group.command("start")
@invocation_options
def start_cmd(app_ctx: AppContext) -> None:
    """Force charging on now (refused unless the cable is plugged in)."""
    execute_command(app_ctx, "charge.start", "charging", lambda ic: ic.start_charging())


@charge_group.command("stop")
@invocation_options
def stop_cmd(app_ctx: AppContext) -> None:
    """Force charging off."""
    execute_command(app_ctx, "charge.stop", "charging stopped", lambda ic: ic.stop_charging())
