from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from jlrcmd.models.vehicle import ServiceStatus, Vehicle, VehicleAttributes, VehicleStatus


class RichOutput:
    """Rich-based terminal output helpers for *jlrcmd*."""

    def __init__(self, console: Console) -> None:
        self._con = console

    # ------------------------------------------------------------------
    # Status summary
    # ------------------------------------------------------------------

    def vehicle_status(self, status: VehicleStatus, *, low_battery_threshold: int) -> None:
        """Print the headline battery / lock / climate fields."""
        table = Table(title="Vehicle Status")
        table.add_column("Field", style="bold")
        table.add_column("Value")

        level = status.battery_level
        if level is not None:
            style = "red" if status.is_battery_low(low_battery_threshold) else "green"
            table.add_row("Battery", f"[{style}]{level}%[/{style}]")
        table.add_row("Charging", "yes" if status.is_charging else "no")
        table.add_row("Cable", "connected" if status.is_plugged_in else "disconnected")
        table.add_row("Doors", "locked" if status.doors_locked else "[yellow]unlocked[/yellow]")
        table.add_row("Climate", "on" if status.climate_active else "off")

        self._con.print(table)

    def status_entries(self, status: VehicleStatus) -> None:
        """Print every raw key/value in the snapshot."""
        table = Table(title="Raw Status")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in sorted(status.items()):
            table.add_row(key, str(value))
        self._con.print(table)

    # ------------------------------------------------------------------
    # Attributes / state
    # ------------------------------------------------------------------

    def vehicle_attributes(self, attrs: VehicleAttributes) -> None:
        title = attrs.nickname or attrs.registration_number or "Vehicle"
        self._con.print(Panel(f"[bold]{title}[/bold]", expand=False))

        table = Table()
        table.add_column("Field", style="bold")
        table.add_column("Value")
        rows = [
            ("Brand", attrs.vehicle_brand),
            ("Model", attrs.vehicle_type),
            ("Registration", attrs.registration_number),
            ("Type code", attrs.vehicle_type_code),
            ("Model year", attrs.model_year),
            ("Fuel", attrs.fuel_type),
        ]
        for field, value in rows:
            if value is not None:
                table.add_row(field, str(value))
        self._con.print(table)

    def vehicle_state(self, vehicle: Vehicle) -> None:
        style = "green" if vehicle.is_online else "yellow"
        self._con.print(f"Vehicle state: [{style}]{vehicle.state}[/{style}]")

    # ------------------------------------------------------------------
    # Command result helpers
    # ------------------------------------------------------------------

    def command_result(self, action: str, result: ServiceStatus) -> None:
        """Print a coloured OK indicator with the service acknowledgement."""
        text = f"[green]OK[/green]  {action}"
        if result.status:
            text += f" ({result.status})"
        self._con.print(text)

    def error(self, message: str) -> None:
        """Print a bold red error line."""
        self._con.print(f"[bold red]Error:[/bold red] {message}")

    def info(self, message: str) -> None:
        """Print an informational message (plain)."""
        self._con.print(message)
