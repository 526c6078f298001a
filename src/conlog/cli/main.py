"""
conlog CLI - Main entry point

Shell scripts use ``conlog emit`` to write log lines (or structured records)
with the same threshold, mode and correlation handling as the Python API.
``expand`` and ``serialize`` expose the payload expander and the error
serializer for inspecting data by hand.
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

import typer
from rich.console import Console
from rich.table import Table

from conlog import __version__
from conlog.core.config.settings import get_settings
from conlog.core.logging.logger import get_logger
from conlog.helpers.expand import expand
from conlog.helpers.level import level_index, select_level
from conlog.helpers.serialize import deserialize_error, serialize_error
from conlog.logger import Logger
from conlog.models.levels import GCP_SEVERITY, LOG_TYPE, LogLevel

# Initialize CLI app
app = typer.Typer(
    name="conlog",
    help="Level-filtered console logging for scripts and services",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# Initialize console and logger
console = Console()
logger = get_logger(__name__)


def _dump(value: object) -> str:
    return json.dumps(value, indent=2, default=str)


def _level_input(value: str) -> Union[str, int]:
    """Digit strings are level numbers, as in LOG_LEVEL."""
    return int(value.strip()) if value.strip().isdigit() else value


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show conlog's own diagnostics"
    ),
) -> None:
    """
    conlog CLI - level-filtered console logging

    Run 'conlog --help' for available commands.
    """
    if verbose:
        logging.getLogger("conlog").setLevel(logging.DEBUG)
        logger.debug("Verbose diagnostics enabled")


@app.command()
def version() -> None:
    """Show conlog version information"""
    settings = get_settings()

    table = Table(title="conlog Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("conlog", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Environment", settings.ENVIRONMENT)

    console.print(table)


@app.command()
def levels() -> None:
    """List severity levels and the configured threshold"""
    settings = get_settings()
    threshold = level_index(settings.level)

    table = Table(title="Severity Levels")
    table.add_column("Level", style="cyan")
    table.add_column("Number", style="green")
    table.add_column("GCP Severity", style="yellow")
    table.add_column("Emitted", style="magenta")

    for level in [*LOG_TYPE, LogLevel.LOG]:
        index = level_index(level)
        table.add_row(
            level.value,
            str(index + 1),
            str(GCP_SEVERITY[level]),
            "yes" if index <= threshold else "no",
        )

    console.print(table)
    console.print(f"Threshold: [bold]{settings.level.value}[/bold] ({threshold})")


@app.command(name="expand")
def expand_command(
    payload: str = typer.Argument(..., help="JSON payload (nested JSON strings are parsed too)"),
    raw: bool = typer.Option(False, "--raw", help="Print the parsed structure as JSON"),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=0, help="Depth limit for the rendering"
    ),
) -> None:
    """
    Deep-parse a JSON payload and print it.

    Without --raw the structure is rendered the way plain-mode log lines
    render it; with --raw it is printed as indented JSON.
    """
    result = expand(payload, expanded=True, raw_mode=raw, server=True, depth=depth)
    typer.echo(_dump(result) if raw else result)


@app.command()
def emit(
    level: str = typer.Argument(..., help="Level name (error/warn/info/debug/trace/log) or number"),
    messages: List[str] = typer.Argument(..., help="Values to log"),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="Output mode: OFF, STD, AWS or GCP"
    ),
    threshold: Optional[str] = typer.Option(
        None, "--threshold", "-t", help="Threshold level (defaults to LOG_LEVEL)"
    ),
    correlation: Optional[str] = typer.Option(
        None, "--correlation", "-c", help="Correlation id attached to the call"
    ),
    expanded: Optional[bool] = typer.Option(
        None, "--expanded/--no-expanded", help="Deep-parse JSON arguments"
    ),
) -> None:
    """
    Write one log call to the console.

    error, warn and trace go to stderr; everything else to stdout.
    """
    if level.strip().lower() == LogLevel.LOG.value:
        target = LogLevel.LOG
    else:
        target = select_level(_level_input(level))

    console_logger = Logger(
        server_mode=mode,
        level=_level_input(threshold) if threshold is not None else None,
        correlation=correlation,
        expanded_mode=expanded,
    )
    getattr(console_logger, target.value)(*messages)


@app.command(name="serialize")
def serialize_command(
    source: Optional[Path] = typer.Argument(
        None, help="JSON file holding an error record (reads stdin when omitted)"
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=0, help="Levels of nesting to keep"
    ),
) -> None:
    """
    Rebuild an error from a JSON record and serialize it again.

    Shows the exception type the record maps to and the record conlog would
    log for it. Anything without a "message" becomes a NonError.
    """
    try:
        text = source.read_text(encoding="utf-8") if source else sys.stdin.read()
        data = json.loads(text)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read JSON input: {e}[/red]")
        raise typer.Exit(1)

    error = deserialize_error(data, max_depth=max_depth)
    logger.debug("error record rebuilt", type=type(error).__name__)

    console.print(f"[cyan]Type:[/cyan] {type(error).__name__}", highlight=False)
    typer.echo(_dump(serialize_error(error, max_depth=max_depth)))


if __name__ == "__main__":
    app()
