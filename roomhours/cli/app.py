"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.hours_api_client import HoursApiClient
from ..adapters.mock_hours_client import MockHoursClient
from ..config import AppConfig, get_default_config_path
from ..domain import bulk_editor
from ..domain.exceptions import HoursError
from ..domain.models import WEEKDAY_NAMES, WeeklySchedule, weekday_of
from ..domain.presets import PRESETS, find_preset
from ..domain.slot_generator import SlotGenerator
from ..domain.time_of_day import format_duration
from ..domain.window_evaluator import contains_interval, invalid_days, is_open_at, validate_range
from ..services.hours_store import HoursStore

app = typer.Typer(
    name="roomhours",
    help="Inspect and edit weekly operating hours for bookable rooms",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use bundled sample data instead of the API.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _load_config(config_file: Optional[Path], mock: bool) -> AppConfig:
    """Load the YAML config; in mock mode a missing file falls back to defaults."""
    config_path = config_file or get_default_config_path()
    if mock and not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_store(config: AppConfig, mock: bool) -> HoursStore:
    if mock:
        console.print("[yellow]⚠  MOCK MODE: using sample data, saves are not persisted[/yellow]")
        client = MockHoursClient(data_file=config.mock_data_file)
    else:
        client = HoursApiClient(
            base_url=config.api_base_url,
            access_token=config.api_token,
            timeout=config.request_timeout_seconds,
        )
    return HoursStore(client)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_weekday(value: str) -> int:
    """Accept 0-6 (0=Sunday) or a day name such as 'fri' or 'Friday'."""
    value = value.strip()
    if value.isdigit() and int(value) in WEEKDAY_NAMES:
        return int(value)
    for weekday, name in WEEKDAY_NAMES.items():
        if len(value) >= 3 and name.lower().startswith(value.lower()):
            return weekday
    raise typer.BadParameter(f"Unknown weekday '{value}'. Use 0-6 (0=Sunday) or a day name.")


def _render_schedule(schedule: WeeklySchedule, title: str) -> None:
    warnings = invalid_days(schedule)

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Open")
    table.add_column("Close")
    table.add_column("Duration", justify="right")
    table.add_column("Status")

    for weekday in WEEKDAY_NAMES:
        day = schedule.get(weekday)
        if day.is_closed:
            table.add_row(day.name, "-", "-", "-", "[dim]Closed[/dim]")
            continue

        check = validate_range(day.open_time, day.close_time)
        if weekday in warnings:
            status = "[red]Invalid[/red]"
        elif check.is_late_night:
            status = "[magenta]Late night[/magenta]"
        else:
            status = "[green]Open[/green]"
        table.add_row(
            day.name,
            day.open_time or "-",
            day.close_time or "-",
            format_duration(check.duration) if check.is_valid else "-",
            status,
        )

    console.print()
    console.print(table)
    for message in warnings.values():
        console.print(f"[yellow]⚠ {message}[/yellow]")
    console.print()


async def _edit_and_save(store: HoursStore, mutator) -> bool:
    await store.load()
    store.update(mutator)
    return await store.save()


def _run_edit(config_file: Optional[Path], mock: bool, verbose: bool, mutator, description: str) -> None:
    """Load, apply one bulk operation, save and show the result."""
    _configure_logging(verbose)
    try:
        config = _load_config(config_file, mock)
        store = _build_store(config, mock)
        saved = asyncio.run(_edit_and_save(store, mutator))
    except (FileNotFoundError, ValueError, HoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if saved:
        console.print(f"[green]✓ {description}[/green]")
    else:
        console.print(f"[yellow]No changes: {description.lower()} matches the saved hours.[/yellow]")
    _render_schedule(store.working, "Business Hours")


@app.command()
def show(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the weekly operating hours.
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_file, mock)
        store = _build_store(config, mock)
        schedule = asyncio.run(store.load())
    except (FileNotFoundError, ValueError, HoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _render_schedule(schedule, "Business Hours")


@app.command()
def slots(
    weekday: Annotated[Optional[str], typer.Argument(help="Weekday (0-6, 0=Sunday) or name. Defaults to --date or today.")] = None,
    on: Annotated[Optional[str], typer.Option("--date", help="Calendar date (YYYY-MM-DD)")] = None,
    interval: Annotated[Optional[int], typer.Option("--interval", "-i", help="Slot length in minutes")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List the calendar slots for one day.

    Examples:

        roomhours slots fri --mock

        roomhours slots --date 2024-11-29 --interval 30
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_file, mock)
        if weekday is not None:
            day_index = _parse_weekday(weekday)
        elif on:
            day_index = weekday_of(pendulum.from_format(on, "YYYY-MM-DD", tz=config.timezone))
        else:
            day_index = weekday_of(pendulum.now(config.timezone))

        generator = SlotGenerator(interval or config.slots.interval_minutes)
        store = _build_store(config, mock)
        schedule = asyncio.run(store.load())
    except (FileNotFoundError, ValueError, HoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    day = schedule.get(day_index)
    sequence = generator.for_day(day)
    if not sequence:
        console.print(f"[yellow]{day.name}: no slots (closed or no valid hours).[/yellow]")
        return

    console.print(f"\n[bold cyan]{day.name}[/bold cyan] {day.open_time} - {day.close_time}, every {generator.interval_minutes} min ({len(sequence)} slots)\n")
    for slot in sequence:
        suffix = " [magenta](next day)[/magenta]" if slot.is_next_day else ""
        console.print(f"  {slot.time}  {slot.display_time:>8}{suffix}")
    console.print()


@app.command()
def check(
    weekday: Annotated[str, typer.Argument(help="Weekday (0-6, 0=Sunday) or name")],
    start: Annotated[str, typer.Argument(help="Booking start (HH:MM)")],
    end: Annotated[str, typer.Argument(help="Booking end (HH:MM)")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Check whether a booking fits inside a day's open window.
    """
    _configure_logging(verbose)
    try:
        day_index = _parse_weekday(weekday)
        config = _load_config(config_file, mock)
        schedule = asyncio.run(_build_store(config, mock).load())
        day = schedule.get(day_index)
        fits = contains_interval(day, start, end)
    except (FileNotFoundError, ValueError, HoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    hours = "closed" if day.is_closed else f"{day.open_time} - {day.close_time}"
    if fits:
        console.print(f"[green]✓ {start} - {end} fits {day.name} ({hours})[/green]")
    else:
        console.print(f"[red]✗ {start} - {end} is outside {day.name} ({hours})[/red]")


@app.command()
def open_at(
    weekday: Annotated[Optional[str], typer.Argument(help="Weekday (0-6, 0=Sunday) or name. Defaults to now.")] = None,
    at: Annotated[Optional[str], typer.Argument(help="Time of day (HH:MM). Defaults to now.")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Tell whether the rooms are open at a weekday and time.
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_file, mock)
        now = pendulum.now(config.timezone)
        day_index = _parse_weekday(weekday) if weekday is not None else weekday_of(now)
        instant = at or now.format("HH:mm")
        schedule = asyncio.run(_build_store(config, mock).load())
        day = schedule.get(day_index)
        is_open = is_open_at(day, instant)
    except (FileNotFoundError, ValueError, HoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if is_open:
        console.print(f"[green]Open[/green] on {day.name} at {instant}")
    else:
        console.print(f"[red]Closed[/red] on {day.name} at {instant}")


@app.command()
def presets():
    """
    List the available presets.
    """
    table = Table(title="Presets", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold yellow")
    table.add_column("Description", style="dim")

    for preset in PRESETS:
        table.add_row(preset.name, preset.description)

    console.print()
    console.print(table)
    console.print()


@app.command()
def apply_preset(
    name: Annotated[str, typer.Argument(help="Preset name, e.g. 'Standard Karaoke'")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Replace the weekly hours with a preset and save.
    """
    try:
        preset = find_preset(name)
    except KeyError as e:
        console.print(f"[bold red]Error:[/bold red] {e.args[0]}")
        raise typer.Exit(1)

    _run_edit(
        config_file, mock, verbose,
        lambda schedule: bulk_editor.apply_preset(schedule, preset),
        f"Applied {preset.name} preset",
    )


@app.command()
def set_day(
    weekday: Annotated[str, typer.Argument(help="Weekday (0-6, 0=Sunday) or name")],
    open_time: Annotated[Optional[str], typer.Option("--open", help="Open time (HH:MM)")] = None,
    close_time: Annotated[Optional[str], typer.Option("--close", help="Close time (HH:MM)")] = None,
    closed: Annotated[Optional[bool], typer.Option("--closed/--not-closed", help="Mark the day closed or open")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Change one day's hours and save.
    """
    day_index = _parse_weekday(weekday)
    changes = {"open_time": open_time, "close_time": close_time, "is_closed": closed}
    changes = {field: value for field, value in changes.items() if value is not None}
    if not changes:
        console.print("[yellow]Nothing to change. Pass --open, --close or --closed.[/yellow]")
        raise typer.Exit(1)

    def mutate(schedule: WeeklySchedule) -> WeeklySchedule:
        for field, value in changes.items():
            schedule = schedule.set(day_index, field, value)
        return schedule

    _run_edit(config_file, mock, verbose, mutate, f"Updated {WEEKDAY_NAMES[day_index]}")


@app.command()
def copy_to_all(
    weekday: Annotated[str, typer.Argument(help="Weekday to copy from (0-6, 0=Sunday) or name")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Apply one day's hours to every day and save.
    """
    day_index = _parse_weekday(weekday)
    _run_edit(
        config_file, mock, verbose,
        lambda schedule: bulk_editor.copy_to_all(schedule, day_index),
        f"Applied {WEEKDAY_NAMES[day_index]} hours to all days",
    )


@app.command()
def reset_defaults(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Restore the default weekly hours and save.
    """
    _run_edit(
        config_file, mock, verbose,
        lambda schedule: bulk_editor.reset_to_defaults(),
        "Restored default hours",
    )


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]roomhours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
