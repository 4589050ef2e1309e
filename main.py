"""Stundenplan-Platzierung: Haupt-CLI.

Verwendung:
  python main.py config init                   Standard-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py check <daten.json>            W365-Daten prüfen
  python main.py build <daten.json>            Aktivitäten aufbauen + platzieren
  python main.py build <daten.json> --tables   zusätzlich Druckdaten schreiben
  python main.py show <daten.json> --teacher T Wochenplan einer Ressource
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config():
    """Lädt die Konfiguration (oder Standardwerte) und richtet Logging ein."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        config = mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)
    _setup_logging(config.log_level)
    return mgr, config


def _load_data_or_abort(path: Path):
    """Lädt W365-Daten oder bricht mit Fehlermeldung ab."""
    from data.w365_import import load_w365
    from models.school_data import InputError

    console.print(f"[bold]Lade Datensatz:[/bold] {path}")
    try:
        return load_w365(path)
    except (InputError, FileNotFoundError) as e:
        console.print(f"[red bold]Eingabe fehlerhaft:[/red bold]\n{escape(str(e))}")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config()
    source = "Standardwerte" if mgr.first_run_check() else str(mgr.DEFAULT_CONFIG)

    table = Table(title=f"Konfiguration ({source})", box=box.ROUNDED)
    table.add_column("Option", style="bold")
    table.add_column("Wert")
    pc = config.placement
    table.add_row("Abwesenheiten sperren", "ja" if pc.block_absences else "nein")
    table.add_row("Kandidaten-Slots", "ja" if pc.possible_slots else "nein")
    table.add_row("Verschiedene Tage", "ja" if pc.different_days else "nein")
    table.add_row("Ausgabeverzeichnis", config.export.output_dir)
    table.add_row("Druckdaten", ", ".join(config.export.print_tables) or "—")
    table.add_row("Log-Level", config.log_level)
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def config_init(force: bool):
    """Schreibt die Standard-Konfiguration als YAML."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    mgr.save(default_engine_config())


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.argument("datei", type=click.Path(path_type=Path))
def cmd_check(datei: Path):
    """Lädt und prüft einen W365-Datensatz."""
    _load_config()
    data = _load_data_or_abort(datei)
    console.print(f"[green]✓[/green] Eingabe gültig")
    console.print(f"\n{data.summary()}")


# ─── BUILD ────────────────────────────────────────────────────────────────────

@click.command("build")
@click.argument("datei", type=click.Path(path_type=Path))
@click.option("--output", "-o", "output", default=None,
              help="Ergebnis-JSON schreiben (Pfad).")
@click.option("--tables", is_flag=True, default=False,
              help="Druckdaten (Class/Teacher/Room) schreiben.")
def cmd_build(datei: Path, output: Optional[str], tables: bool):
    """Baut die Aktivitäten auf und platziert fixierte und vorgegebene Stunden."""
    mgr, config = _load_config()
    data = _load_data_or_abort(datei)

    from analysis.occupancy_validator import OccupancyValidator
    from engine.core import TimetableEngine
    from engine.diagnostics import CollectingDiagnostics, LoggingDiagnostics

    diagnostics = CollectingDiagnostics(forward=LoggingDiagnostics())
    engine = TimetableEngine(data, config.placement, diagnostics)
    result = engine.build()

    placed = len(result.activities) - len(result.unplaced())
    console.print(Panel(
        f"Aktivitäten: {len(result.activities)} | platziert: {placed} | "
        f"offen: {len(result.unplaced())}\n"
        f"Ressourcen: {len(result.resources)} | Slots/Woche: {result.slots_per_week}",
        title="Aufbau",
        border_style="cyan",
    ))
    diagnostics.print_rich()

    report = OccupancyValidator().validate(result)
    report.print_rich()

    if output:
        result.save_json(Path(output))
        console.print(f"[green]✓[/green] Ergebnis gespeichert: {output}")

    if tables:
        from export.print_data import PrintDataBuilder
        documents = PrintDataBuilder(engine).write(
            config.export.print_tables, Path(config.export.output_dir), datei.stem,
        )
        console.print(f"[green]✓[/green] Druckdaten: {', '.join(documents)}")

    sys.exit(0 if report.is_valid else 1)


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("datei", type=click.Path(path_type=Path))
@click.option("--teacher", "-t", default=None, help="Lehrkraft (Id).")
@click.option("--room", "-r", default=None, help="Raum (Id).")
@click.option("--class", "-c", "class_ref", default=None, help="Klasse (Id).")
def cmd_show(datei: Path, teacher: Optional[str], room: Optional[str],
             class_ref: Optional[str]):
    """Zeigt den Wochenplan einer Lehrkraft, eines Raums oder einer Klasse."""
    mgr, config = _load_config()
    if sum(x is not None for x in (teacher, room, class_ref)) != 1:
        console.print("[red]Genau eine von --teacher, --room, --class angeben.[/red]")
        sys.exit(1)
    data = _load_data_or_abort(datei)

    from engine.core import TimetableEngine
    from export.tui_renderer import render_resource_rows, resource_label

    engine = TimetableEngine(data, config.placement)
    engine.build()
    resources = engine.resources
    if resources is None:
        raise RuntimeError("TimetableEngine.build() hat keinen Ressourcen-Index erzeugt")
    try:
        if teacher is not None:
            indices = [resources.teacher(teacher)]
        elif room is not None:
            indices = [resources.room(room)]
        else:
            indices = resources.group(class_ref)
    except KeyError:
        console.print(f"[red]Unbekannte Ressource: {teacher or room or class_ref}[/red]")
        sys.exit(1)

    for rix in indices:
        table = Table(title=resource_label(engine, rix), box=box.ROUNDED, show_lines=True)
        table.add_column("Std.", style="bold")
        table.add_column("Zeit", style="dim")
        for d in data.days:
            table.add_column(d.tag or d.name, justify="center")
        for row in render_resource_rows(engine, rix):
            table.add_row(*row)
        console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Platzierung von Unterrichtsstunden (W365-Daten).

    Starten Sie mit: python main.py check <daten.json>
    """


def main():
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_check)
cli.add_command(cmd_build)
cli.add_command(cmd_show)


if __name__ == "__main__":
    main()
