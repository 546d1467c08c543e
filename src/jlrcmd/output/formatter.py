from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from rich.console import Console

from jlrcmd.models.vehicle import ServiceStatus, Vehicle, VehicleAttributes
from jlrcmd.output.json_output import format_json_error, format_json_response
from jlrcmd.output.rich_output import RichOutput

if TYPE_CHECKING:
    from io import TextIOBase


def detect_format(stream: Any, forced: str | None = None) -> str:
    """Return *forced* if given, else ``"rich"`` for a terminal and ``"json"`` for a pipe."""
    if forced is not None:
        return forced
    isatty = getattr(stream, "isatty", None)
    return "rich" if isatty is not None and isatty() else "json"


class OutputFormatter:
    """Write command results to *stream* (default ``sys.stdout``).

    JSON mode prints one envelope per call so output can be piped into
    ``jq``.  ``"quiet"`` renders Rich output on stderr, leaving stdout empty.
    """

    def __init__(
        self,
        *,
        stream: TextIOBase | Any | None = None,
        force_format: str | None = None,
    ) -> None:
        self._stream = stream or sys.stdout
        self._format = detect_format(self._stream, force_format)
        console = Console(stderr=True) if self._format == "quiet" else Console(file=self._stream)
        self._rich = RichOutput(console)

    @property
    def format(self) -> str:  # noqa: A003
        return self._format

    @property
    def rich(self) -> RichOutput:
        return self._rich

    def output(self, data: Any, *, command: str, action: str | None = None) -> None:
        """Emit the result of *command*.

        In JSON mode *data* is wrapped in the success envelope.  Otherwise the
        Rich view is chosen by type: a :class:`ServiceStatus` is reported as
        an acknowledgement labelled *action*, attributes as a table and a
        :class:`Vehicle` as its online state.  Anything else is printed as is.
        """
        if self._format == "json":
            self._emit(format_json_response(data=data, command=command))
        elif isinstance(data, ServiceStatus):
            self._rich.command_result(action or command, data)
        elif isinstance(data, VehicleAttributes):
            self._rich.vehicle_attributes(data)
        elif isinstance(data, Vehicle):
            self._rich.vehicle_state(data)
        else:
            self._rich.info(str(data))

    def output_error(self, *, code: str, message: str, command: str) -> None:
        if self._format == "json":
            self._emit(format_json_error(code=code, message=message, command=command))
        else:
            self._rich.error(message)

    def _emit(self, text: str) -> None:
        print(text, file=self._stream)  # noqa: T201
