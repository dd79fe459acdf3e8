"""CLI — Log source management commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from minutecat.cli.common import console, fail, load_settings, open_actions
from minutecat.commands import FileType
from minutecat.exceptions import MinutecatError

app = typer.Typer(help="Add, list, and delete monitored log sources.")

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to settings.yaml.")
]


@app.command("add")
def add_source(
    name: str = typer.Argument(help="Display name of the log."),
    location: str = typer.Argument(help="File path, or URL with --type http."),
    lines: int = typer.Option(100, "--lines", "-n", min=0, help="Number of trailing lines to read."),
    refresh: str = typer.Option("1m", "--refresh", "-r", help="Reload interval, e.g. 30s or 1h20m."),
    file_type: str = typer.Option("local", "--type", "-t", help="Source type: local or http."),
    timeout: float | None = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds (defaults to settings)."
    ),
    config: ConfigOption = None,
) -> None:
    """Add a log source."""
    try:
        settings = load_settings(config)
        logfile = open_actions(settings).add_source(
            name=name,
            location=location,
            line_limit=lines,
            refresh_time=refresh,
            file_type=FileType.parse(file_type),
            timeout_seconds=timeout if timeout is not None else settings.http.timeout_seconds,
        )
    except MinutecatError as exc:
        fail(exc)

    console.print(f"[green]Source added:[/green] {logfile.name}")
    console.print(f"Refresh: {logfile.task.get_time_str()}")


@app.command("list")
def list_sources(config: ConfigOption = None) -> None:
    """List log sources with their indices."""
    try:
        entries = open_actions(load_settings(config)).list_sources()
    except MinutecatError as exc:
        fail(exc)

    if not entries:
        console.print("[yellow]No log sources configured.[/yellow]")
        return

    table = Table(title="Log sources")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Name")
    for entry in entries:
        table.add_row(str(entry.index), entry.name)
    console.print(table)


@app.command("delete")
def delete_source(
    index: int = typer.Argument(help="Index shown by 'sources list'."),
    config: ConfigOption = None,
) -> None:
    """Delete a log source."""
    try:
        removed = open_actions(load_settings(config)).delete_source(index)
    except MinutecatError as exc:
        fail(exc)

    if removed is not None:
        console.print(f"[green]Source deleted:[/green] {removed.name}")
