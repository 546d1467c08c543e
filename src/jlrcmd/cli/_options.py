"""Options accepted both on the root group and after a subcommand name."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from collections.abc import Callable

    from jlrcmd.cli.main import AppContext

OUTPUT_FORMATS = ("rich", "json", "quiet")

# (parameter name, option declarations, click.option keywords).  ``envvar``
# is only honoured on the root group.
_INVOCATION_OPTIONS: tuple[tuple[str, tuple[str, ...], dict[str, Any]], ...] = (
    ("vin", ("--vin",), {"default": None, "help": "Vehicle VIN (overrides JLR_VIN)"}),
    (
        "pin",
        ("--pin",),
        {"default": None, "help": "InControl PIN for remote commands (overrides JLR_PIN)"},
    ),
    (
        "wait_minutes",
        ("--wait-minutes",),
        {
            "type": click.FloatRange(min=0, min_open=True),
            "default": None,
            "help": "Wake-up deadline in minutes (overrides JLR_WAIT_MINUTES)",
        },
    ),
    (
        "output_format",
        ("--format",),
        {
            "type": click.Choice(OUTPUT_FORMATS),
            "default": None,
            "envvar": "JLR_OUTPUT_FORMAT",
            "help": "Output format (default: auto-detect)",
        },
    ),
    ("quiet", ("--quiet",), {"is_flag": True, "default": False, "help": "Suppress normal output"}),
    (
        "verbose",
        ("--verbose",),
        {"is_flag": True, "default": False, "help": "Enable verbose logging"},
    ),
)


def _attach(f: Callable[..., Any], *, root: bool) -> Callable[..., Any]:
    for name, decls, attrs in reversed(_INVOCATION_OPTIONS):
        if not root:
            attrs = {k: v for k, v in attrs.items() if k != "envvar"}
        f = click.option(*decls, name, **attrs)(f)
    return f


def root_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the invocation options to the root group callback."""
    return _attach(f, root=True)


def invocation_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Let a leaf command take the invocation options after its name.

    ``jlrcmd charge start --wait-minutes 3 --pin 1234`` behaves like
    ``jlrcmd --wait-minutes 3 --pin 1234 charge start``.  Values given on
    the leaf are layered over the root group's by
    :meth:`AppContext.apply_overrides`, so the leaf wins when both are set.
    """

    @click.pass_obj
    def wrapper(app_ctx: AppContext, /, **kwargs: Any) -> Any:
        app_ctx.apply_overrides(**{name: kwargs.pop(name) for name, _, _ in _INVOCATION_OPTIONS})
        return f(app_ctx, **kwargs)

    functools.update_wrapper(wrapper, f)
    return _attach(wrapper, root=False)
