"""CLI entry-point: Click command group and dispatch."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler

from jlrcmd.api.errors import (
    ApiError,
    AuthError,
    ChargerNotConnectedError,
    ConfigError,
    WakeUpTimeoutError,
)
from jlrcmd.cli._options import root_options
from jlrcmd.models.config import AppSettings
from jlrcmd.output.formatter import OutputFormatter

# ---------------------------------------------------------------------------
# Application context (stored in ctx.obj)
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class AppContext:
    """Shared state passed to every Click command via ``@click.pass_obj``."""

    vin: str | None = None
    output_format: str | None = None
    quiet: bool = False
    verbose: bool = False
    settings_overrides: dict[str, Any] = dataclasses.field(default_factory=dict)
    _formatter: OutputFormatter | None = dataclasses.field(default=None, repr=False)
    _settings: AppSettings | None = dataclasses.field(default=None, repr=False)

    @property
    def formatter(self) -> OutputFormatter:
        if self._formatter is None:
            force = "quiet" if self.quiet else self.output_format
            self._formatter = OutputFormatter(force_format=force)
        return self._formatter

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = AppSettings(**self.settings_overrides)
        return self._settings

    def apply_overrides(
        self,
        *,
        vin: str | None = None,
        pin: str | None = None,
        wait_minutes: float | None = None,
        output_format: str | None = None,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        """Layer command-line values over the current ones; unset values are skipped."""
        if vin is not None:
            self.vin = vin
        for name, value in (("pin", pin), ("wait_minutes", wait_minutes)):
            if value is not None:
                self.settings_overrides[name] = value
                self._settings = None
        if output_format is not None:
            self.output_format = output_format
            self._formatter = None
        if quiet:
            self.quiet = True
            self._formatter = None
        if verbose and not self.verbose:
            self.enable_verbose()

    def enable_verbose(self) -> None:
        self.verbose = True
        configure_logging(verbose=True)


def configure_logging(*, verbose: bool) -> None:
    """Route ``jlrcmd`` log records to stderr through Rich."""
    pkg_logger = logging.getLogger("jlrcmd")
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


# ---------------------------------------------------------------------------
# Root Click group
# ---------------------------------------------------------------------------


@click.group()
@root_options
@click.pass_context
def cli(ctx: click.Context, **options: Any) -> None:
    """Query and control Jaguar Land Rover vehicles via the InControl API."""
    configure_logging(verbose=False)
    ctx.obj = AppContext()
    ctx.obj.apply_overrides(**options)


# ---------------------------------------------------------------------------
# Register subcommand groups
# ---------------------------------------------------------------------------


def _register_commands() -> None:
    """Import and attach all subcommand groups to the root CLI."""
    from jlrcmd.cli.charge import charge_group
    from jlrcmd.cli.climate import climate_group
    from jlrcmd.cli.security import security_group
    from jlrcmd.cli.vehicle import vehicle_group

    cli.add_command(charge_group)
    cli.add_command(climate_group)
    cli.add_command(security_group)
    cli.add_command(vehicle_group)


_register_commands()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate command handler."""
    try:
        cli(args=argv, standalone_mode=False)
    except click.exceptions.Exit as exc:
        raise SystemExit(exc.exit_code) from None
    except click.exceptions.Abort:
        raise SystemExit(1) from None
    except click.exceptions.ClickException as exc:
        exc.show()
        raise SystemExit(exc.exit_code) from None
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except SystemExit:
        raise
    except Exception as exc:
        app_ctx = _extract_app_ctx()
        formatter = app_ctx.formatter if app_ctx else OutputFormatter()
        cmd_name = _get_command_name()

        if _handle_known_error(exc, formatter, cmd_name):
            raise SystemExit(1) from exc

        formatter.output_error(
            code=type(exc).__name__,
            message=str(exc),
            command=cmd_name,
        )
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# Helpers for error handling
# ---------------------------------------------------------------------------


def _extract_app_ctx() -> AppContext | None:
    """Try to extract AppContext from the current Click context."""
    ctx = click.get_current_context(silent=True)
    while ctx is not None:
        if isinstance(ctx.obj, AppContext):
            return ctx.obj
        ctx = ctx.parent
    return None


def _get_command_name() -> str:
    """Reconstruct a dotted command name from the Click context chain."""
    ctx = click.get_current_context(silent=True)
    parts: list[str] = []
    while ctx is not None:
        if ctx.info_name and ctx.info_name != "cli":
            parts.append(ctx.info_name)
        ctx = ctx.parent
    return ".".join(reversed(parts)) or "unknown"


def _handle_known_error(
    exc: Exception,
    formatter: OutputFormatter,
    cmd_name: str,
) -> bool:
    """Render well-known errors with next steps.  Returns ``True`` if handled."""
    if isinstance(exc, AuthError):
        _report(
            formatter,
            cmd_name,
            code="auth_failed",
            message=str(exc) or "InControl rejected the login.",
            hint="Check JLR_USERNAME / JLR_PASSWORD and that JLR_DEVICE_ID is a stable UUID.",
        )
        return True
    if isinstance(exc, WakeUpTimeoutError):
        _report(
            formatter,
            cmd_name,
            code="wake_timeout",
            message=str(exc),
            hint="Raise JLR_WAIT_MINUTES or retry once the vehicle has network coverage.",
        )
        return True
    if isinstance(exc, ChargerNotConnectedError):
        _report(
            formatter,
            cmd_name,
            code="charger_disconnected",
            message=str(exc),
            hint="Plug in the charging cable and try again.",
        )
        return True
    if isinstance(exc, ConfigError):
        _report(formatter, cmd_name, code="config_error", message=str(exc), hint="")
        return True
    if isinstance(exc, ApiError):
        _report(formatter, cmd_name, code="api_error", message=str(exc), hint="")
        return True
    return False


def _report(
    formatter: OutputFormatter,
    cmd_name: str,
    *,
    code: str,
    message: str,
    hint: str,
) -> None:
    if formatter.format == "json":
        formatter.output_error(
            code=code,
            message=f"{message} {hint}".strip(),
            command=cmd_name,
        )
        return

    formatter.rich.error(message)
    if hint:
        formatter.rich.info(f"[dim]{hint}[/dim]")
