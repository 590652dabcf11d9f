"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.calendar_file import CalendarFileReader
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MeetingSlotError
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingslotfinder",
    help="Find free meeting slots within a day",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)
    return AppConfig.load_or_default(get_default_config_path())


def _select_calendar(config: AppConfig, calendar: Optional[Path], sample: bool) -> CalendarFileReader:
    """
    Pick the calendar source: explicit file, bundled sample or configured file.
    """
    if calendar is not None:
        return CalendarFileReader(calendar)

    if sample:
        console.print("[yellow]⚠  BEISPIEL-MODUS: Verwende mitgelieferten Kalender[/yellow]\n")
        return CalendarFileReader.sample()

    if config.calendar_file is not None:
        return CalendarFileReader(config.calendar_file)

    console.print(
        "[bold red]Fehler:[/bold red] Kein Kalender angegeben. "
        "Nutzen Sie --calendar, --sample oder 'calendar_file' in der Config."
    )
    raise typer.Exit(1)


def _format_duration(minutes: int) -> str:
    return pendulum.duration(minutes=minutes).in_words(locale="de")


@app.command()
def find(
    participants: Annotated[Optional[List[str]], typer.Argument(help="Pflicht-Teilnehmer (Namen oder E-Mail-Adressen).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optionaler Teilnehmer (mehrfach verwendbar).")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    calendar: Annotated[Optional[Path], typer.Option("--calendar", "-f", help="Kalender-Datei (JSON oder YAML).")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    sample: Annotated[bool, typer.Option("--sample", help="Mitgelieferten Beispiel-Kalender nutzen.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug-Ausgaben anzeigen.")] = False,
):
    """
    Find free meeting slots for mandatory and optional participants.

    Examples:

        # Mandatory participants from the configured calendar
        meetingslotfinder find max anna --duration 60

        # With optional participants
        meetingslotfinder find max -o lena --calendar day.json

        # Use the bundled sample calendar
        meetingslotfinder find max anna --sample
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        source = _select_calendar(config, calendar, sample)

        mandatory = config.resolve_participants(participants or [])
        optional_attendees = config.resolve_participants(optional or [])
        min_duration = duration if duration is not None else config.defaults.duration_minutes

        console.print("[bold cyan]📊 Zusammenfassung:[/bold cyan]")
        console.print(f"   Pflicht-Teilnehmer: {', '.join(mandatory) or '-'}")
        console.print(f"   Optionale Teilnehmer: {', '.join(optional_attendees) or '-'}")
        console.print(f"   Mindestdauer: {min_duration} Minuten")
        console.print()

        service = MeetingFinderService(calendar_source=source)
        slots = service.find_slots(
            attendees=mandatory,
            optional_attendees=optional_attendees,
            duration_minutes=min_duration
        )

        if not slots:
            console.print(
                "[yellow]⚠ Keine verfügbaren Zeitslots gefunden.[/yellow]\n"
                "Versuchen Sie eine kürzere Mindestdauer oder weniger Teilnehmer."
            )
            return

        table = Table(
            title=f"{len(slots)} verfügbare Zeitslot(s)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Zeitraum", style="bold green")
        table.add_column("Dauer", style="dim")

        for slot in slots:
            table.add_row(str(slot), _format_duration(slot.duration))

        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, MeetingSlotError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def events(
    calendar: Annotated[Optional[Path], typer.Option("--calendar", "-f", help="Kalender-Datei (JSON oder YAML).")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
    sample: Annotated[bool, typer.Option("--sample", help="Mitgelieferten Beispiel-Kalender nutzen.")] = False,
):
    """
    List the events of a calendar.
    """
    try:
        config = _load_config(config_file)
        source = _select_calendar(config, calendar, sample)
        calendar_events = source.load_events()
    except (FileNotFoundError, ValueError, MeetingSlotError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)

    if not calendar_events:
        console.print("[yellow]Keine Termine im Kalender.[/yellow]")
        return

    table = Table(
        title="Termine",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Zeitraum", style="bold yellow")
    table.add_column("Titel")
    table.add_column("Teilnehmer", style="dim")

    for event in sorted(calendar_events, key=lambda e: e.when):
        table.add_row(str(event.when), event.title, ", ".join(sorted(event.attendees)))

    console.print()
    console.print(table)
    console.print()


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.colleagues:
        console.print("[yellow]Keine Kollegen in der Config-Datei definiert.[/yellow]")
        return

    table = Table(
        title="Konfigurierte Kollegen",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (Alias)", style="bold yellow")
    table.add_column("E-Mail", style="dim")

    for colleague in config.colleagues:
        table.add_row(
            colleague.name,
            colleague.email
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingslotfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
