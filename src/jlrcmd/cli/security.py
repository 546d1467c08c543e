"""CLI commands for door lock / unlock."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from jlrcmd.cli._client import execute_command
from jlrcmd.cli._options import invocation_options

if TYPE_CHECKING:
    from jlrcmd.cli.main import AppContext

security_group = click.Group("security", help="Door lock commands (require JLR_PIN)")


@security_group.command("lock")
@invocation_options
def lock_cmd(app_ctx: AppContext) -> None:
    """Lock all doors."""
    execute_command(app_ctx, "security.lock", "lock", lambda ic: ic.lock_vehicle())


@security_group.command("unlock")
@invocation_options
def unlock_cmd(app_ctx: AppContext) -> None:
    """Unlock all doors."""
    execute_command(app_ctx, "security.unlock", "unlock", lambda ic: ic.unlock_vehicle())
