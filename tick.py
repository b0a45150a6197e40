#!/usr/bin/env python3
"""
Open Tick CLI Tool

Commands for converting climbing logbook exports into canonical ticks.

Usage:
    tick convert ticks.csv
    tick convert logbook.csv --source thecrag --format json --output ticks.json
    tick discipline "Trad, TR" --source mountainproject
    tick resolve https://www.mountainproject.com/route/105748391/the-nose
"""

import io
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

# Add libs to path (local to CLI)
CLI_ROOT = Path(__file__).parent
if (CLI_ROOT / "libs" / "py-open-tick").exists():
    sys.path.insert(0, str(CLI_ROOT / "libs" / "py-open-tick"))

from open_tick import (  # noqa: E402
    CanonicalTick,
    DataSource,
    IdentityError,
    OpenTickError,
    __version__,
    convert_many,
    map_discipline,
    resolve_mountain_project_route_id,
)
from open_tick.config import ON_ERROR_CHOICES, OUTPUT_FORMATS, Settings  # noqa: E402
from open_tick.readers import read_ticks, write_canonical_csv  # noqa: E402

logger = logging.getLogger("open_tick.cli")

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="tick",
    help="Open Tick CLI - Climbing logbook conversion tool",
    no_args_is_help=True,
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"[bold cyan]Open Tick CLI[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    )
):
    """Open Tick CLI - Climbing logbook conversion tool."""
    pass


# ============================================================================
# Helper Functions
# ============================================================================

def _load_settings(env_file: Optional[str]) -> Settings:
    """Load .env (or the given file) and build settings from the environment."""
    from dotenv import load_dotenv

    if env_file:
        env_path = Path(env_file)
        if not env_path.exists():
            console.print(f"[red]❌ Environment file not found: {env_file}[/red]")
            raise typer.Exit(1)
        load_dotenv(env_path, override=True)
    else:
        load_dotenv(Path.cwd() / ".env")

    try:
        return Settings.from_env()
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


def _configure_logging(level: int) -> None:
    """Route library logging through rich on stderr."""
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False)
    handler.setLevel(level)
    root.addHandler(handler)


def _parse_source(source: Optional[str]) -> Optional[DataSource]:
    if source is None:
        return None
    try:
        return DataSource(source.strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in DataSource)
        console.print(f"[red]❌ Unknown source: {source}[/red] (choose from {choices})")
        raise typer.Exit(1)


def _render_table(ticks: list[CanonicalTick], title: str) -> None:
    table = Table(title=title)
    table.add_column("Date", style="dim")
    table.add_column("Route", style="cyan")
    table.add_column("Location")
    table.add_column("Route Discipline", style="yellow")
    table.add_column("Ascent Discipline", style="yellow")
    table.add_column("Grade", style="green")
    table.add_column("Your Grade", style="magenta")

    for tick in ticks:
        table.add_row(
            tick.date.isoformat() if tick.date else "-",
            tick.route_name or "-",
            tick.route_location or "-",
            str(tick.route_discipline) if tick.route_discipline is not None else "-",
            str(tick.ascent_discipline) if tick.ascent_discipline is not None else "-",
            tick.route_grade or "-",
            tick.ascent_grade or "-",
        )

    console.print(table)


# ============================================================================
# CONVERT Command - Logbook Conversion
# ============================================================================

@app.command()
def convert(
    file: Path = typer.Argument(..., help="Logbook CSV export"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Export type (mountainproject, thecrag); detected from header if omitted"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format (table, json, csv)"),
    on_error: Optional[str] = typer.Option(None, "--on-error", help="Conversion error policy (skip, abort)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write json/csv output to a file"),
    env_file: Optional[str] = typer.Option(None, "--env", help="Environment file"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
):
    """
    Convert a logbook export into canonical ticks.

    Examples:
        tick convert ticks.csv
        tick convert logbook.csv --source thecrag --format csv -o ticks.csv
    """
    settings = _load_settings(env_file)
    _configure_logging(logging.DEBUG if verbose else settings.log_level)

    output_format = (output_format or settings.output_format).lower()
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]❌ Unknown format: {output_format}[/red] (choose from {', '.join(OUTPUT_FORMATS)})")
        raise typer.Exit(1)

    on_error = (on_error or settings.on_error).lower()
    if on_error not in ON_ERROR_CHOICES:
        console.print(f"[red]❌ Unknown error policy: {on_error}[/red] (choose from {', '.join(ON_ERROR_CHOICES)})")
        raise typer.Exit(1)

    data_source = _parse_source(source)

    if not file.exists():
        console.print(f"[red]❌ File not found: {file}[/red]")
        raise typer.Exit(1)

    ticks: list[CanonicalTick] = []
    failures = 0
    try:
        with open(file, "r", encoding="utf-8-sig", newline="") as f:
            for outcome in convert_many(read_ticks(f, data_source), on_error=on_error):
                if outcome.ok:
                    ticks.append(outcome.tick)
                else:
                    failures += 1
                    logger.warning("Skipping record %s: %s", outcome.index + 1, outcome.error)
    except OpenTickError as e:
        console.print(f"[red]❌ {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except UnicodeDecodeError:
        console.print(f"[red]❌ Not a UTF-8 text file: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    logger.info("Converted %s ticks from %s (%s skipped)", len(ticks), file, failures)

    if output_format == "table":
        _render_table(ticks, title=f"Ticks from {file.name} ({len(ticks)})")
        if failures:
            console.print(f"[yellow]⚠️  {failures} records skipped[/yellow]")
        return

    buffer = io.StringIO()
    if output_format == "json":
        json.dump([tick.to_dict() for tick in ticks], buffer, indent=2)
        buffer.write("\n")
    else:
        write_canonical_csv(ticks, buffer)

    if output:
        output.write_text(buffer.getvalue(), encoding="utf-8")
        console.print(f"[green]✅ Wrote {len(ticks)} ticks to {output}[/green]")
    else:
        typer.echo(buffer.getvalue(), nl=False)


# ============================================================================
# DISCIPLINE Command - Taxonomy Lookup
# ============================================================================

@app.command()
def discipline(
    token: str = typer.Argument(..., help="Style token as exported (e.g. \"Trad, TR\", TopRope)"),
    source: str = typer.Option(..., "--source", "-s", help="Export type (mountainproject, thecrag)"),
):
    """
    Show which discipline tags a source's style token maps to.

    Examples:
        tick discipline "Trad, TR" --source mountainproject
        tick discipline TopRope --source thecrag
    """
    data_source = _parse_source(source)
    mapped = map_discipline(data_source, token)

    if mapped.is_empty():
        console.print(f"[yellow]No known discipline in[/yellow] [cyan]{token!r}[/cyan]")
        return

    console.print(f"[cyan]{token!r}[/cyan] → [bold]{mapped}[/bold]")


# ============================================================================
# RESOLVE Command - Route Identity
# ============================================================================

@app.command()
def resolve(
    url: str = typer.Argument(..., help="Mountain Project route URL"),
):
    """
    Resolve a Mountain Project route URL to its route id.

    Example:
        tick resolve https://www.mountainproject.com/route/105748391/the-nose
    """
    try:
        route_id = resolve_mountain_project_route_id(url)
    except IdentityError as e:
        console.print(f"[red]❌ {e.kind.value}:[/red] {escape(e.message)}")
        raise typer.Exit(1)

    console.print(f"Route ID: [green]{route_id}[/green]")


# ============================================================================
# VERSION Command
# ============================================================================

@app.command()
def version():
    """Show version information."""
    console.print("[bold]Open Tick CLI[/bold]")
    console.print(f"Version: [cyan]{__version__}[/cyan]")
    console.print()
    console.print(f"Repository: [dim]{CLI_ROOT}[/dim]")


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    app()
