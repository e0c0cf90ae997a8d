"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.api_client import ApiClient
from ..adapters.json_store import JsonProviderStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import CareslotsError, SlotUnavailable, ValidationError
from ..domain.formatting import format_12h, format_slot, slots_response
from ..domain.models import TimeInterval, WallClockTime, parse_date, parse_instant
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="careslots",
    help="Query bookable appointment slots of healthcare providers",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", help="JSON provider data file. Overrides data_file and api from the config."),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the given config file, or the default one when it exists."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)

    return AppConfig()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_service(config: AppConfig, data_file: Optional[Path]) -> AvailabilityService:
    """
    Pick the provider data source: an explicit data file wins, then the
    configured data file, then the booking API.
    """
    source_file = data_file or config.data_file

    if source_file is not None:
        store = JsonProviderStore.from_file(source_file)
        return AvailabilityService(hours_source=store, booking_source=store)

    if config.api is not None:
        client = ApiClient(
            base_url=config.api.base_url,
            token=config.api.token,
            timeout_seconds=config.api.timeout_seconds,
        )
        return AvailabilityService(hours_source=client, booking_source=client)

    raise ValueError(
        "No provider data source configured. Pass --data or set data_file or api in the config."
    )


def _setup(config_file: Optional[Path], data_file: Optional[Path]) -> tuple[AppConfig, AvailabilityService]:
    config = _load_config(config_file)
    _configure_logging(config.log_level)
    return config, _build_service(config, data_file)


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def slots(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    not_before: Annotated[Optional[str], typer.Option("--not-before", help="Hide slots starting before this ISO datetime")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the slots as JSON.")] = False,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List the bookable slots of a provider on one date.

    Examples:

        careslots slots 42 --date 2024-11-25
        careslots slots 42 --date 2024-11-25 --duration 60 --data providers.json
        careslots slots 42 --date 2024-11-25 --not-before 2024-11-25T12:15
    """
    try:
        config, service = _setup(config_file, data_file)
        day = parse_date(date)
        threshold = parse_instant(not_before) if not_before else None
        slot_duration = duration if duration is not None else config.defaults.slot_duration_minutes

        available = service.get_available_slots(
            provider_id,
            day,
            slot_duration,
            not_before=threshold,
        )
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if as_json:
        console.print_json(data=slots_response(provider_id, day, available))
        return

    if not available:
        console.print(
            f"[yellow]⚠ No available slots for provider {provider_id} on {day}.[/yellow]"
        )
        return

    table = Table(
        title=f"Available slots - provider {provider_id}, {day.format('dddd, YYYY-MM-DD')}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Start", style="bold yellow")
    table.add_column("End")
    table.add_column("Display", style="dim")

    for slot in available:
        table.add_row(str(slot.start_time), str(slot.end_time), format_slot(slot))

    console.print()
    console.print(table)
    console.print(f"[green]✓ {len(available)} slot(s) of {slot_duration} minutes[/green]\n")


@app.command()
def check(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    start: Annotated[str, typer.Option("--start", help="Start time (HH:mm)")],
    end: Annotated[str, typer.Option("--end", help="End time (HH:mm)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Check whether a time range can be booked with a provider.
    """
    try:
        _, service = _setup(config_file, data_file)
        candidate = TimeInterval.on(
            parse_date(date),
            WallClockTime.parse(start),
            WallClockTime.parse(end),
        )
        service.ensure_bookable(provider_id, candidate)
    except SlotUnavailable as e:
        console.print(f"[bold red]✗ Not bookable:[/bold red] {e}")
        raise typer.Exit(1)
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(f"[bold green]✓ Bookable:[/bold green] {candidate} with provider {provider_id}")


@app.command()
def hours(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show a provider's weekly operating hours and whether they are valid.
    """
    try:
        _, service = _setup(config_file, data_file)
        week = service.get_operating_hours(provider_id)
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    table = Table(
        title=f"Operating hours - provider {provider_id}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Day", style="bold yellow")
    table.add_column("Hours")

    for entry in week:
        if entry.is_closed:
            table.add_row(entry.weekday.label, "[dim]Closed[/dim]")
        else:
            table.add_row(
                entry.weekday.label,
                f"{format_12h(entry.start_time)} - {format_12h(entry.end_time)}",
            )

    console.print()
    console.print(table)

    try:
        service.validate_operating_hours(provider_id)
    except ValidationError as e:
        console.print(f"[yellow]⚠ {e}[/yellow]\n")
        raise typer.Exit(1)

    console.print("[green]✓ Weekly configuration is valid[/green]\n")


@app.command()
def free(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show the uninterrupted free periods of a provider on one date.
    """
    try:
        _, service = _setup(config_file, data_file)
        day = parse_date(date)
        periods = service.get_free_periods(provider_id, day)
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not periods:
        console.print(f"[yellow]⚠ No free time for provider {provider_id} on {day}.[/yellow]")
        return

    console.print(f"[bold green]✓ {len(periods)} free period(s):[/bold green]\n")
    for period in periods:
        console.print(f"  {period} ({period.duration_minutes()} min)")
    console.print()


@app.command("is-open")
def is_open(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    at: Annotated[Optional[str], typer.Option("--at", help="ISO datetime to check. Defaults to now.")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show whether a provider is open right now or at a given time.

    Examples:

        careslots is-open 42
        careslots is-open 42 --at 2024-11-25T12:30
    """
    try:
        _, service = _setup(config_file, data_file)
        moment = parse_instant(at) if at else pendulum.now()
        open_now = service.is_open_at(provider_id, moment)
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if open_now:
        console.print(f"[bold green]✓ Open[/bold green] provider {provider_id} at {moment.format('YYYY-MM-DD HH:mm')}")
    else:
        console.print(f"[yellow]Closed[/yellow] provider {provider_id} at {moment.format('YYYY-MM-DD HH:mm')}")


@app.command()
def selectable(
    provider_id: Annotated[str, typer.Argument(help="Provider ID")],
    date: Annotated[str, typer.Option("--date", help="Date (YYYY-MM-DD)")],
    today: Annotated[Optional[str], typer.Option("--today", help="Reference date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Check whether a date can be picked for an appointment.

    Past dates and days the provider is closed on cannot be picked.
    """
    try:
        _, service = _setup(config_file, data_file)
        day = parse_date(date)
        reference = parse_date(today) if today else pendulum.today().date()
        allowed = service.is_date_selectable(provider_id, day, reference)
    except (CareslotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not allowed:
        console.print(f"[bold red]✗ Not selectable:[/bold red] {day} for provider {provider_id}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓ Selectable:[/bold green] {day} for provider {provider_id}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]careslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
