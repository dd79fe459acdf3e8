"""CLI — Trigger management commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from minutecat.cli.common import console, fail, load_settings, open_actions
from minutecat.exceptions import MinutecatError
from minutecat.triggers import TriggerType

app = typer.Typer(help="Add, list, and delete the triggers of a log source.")

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to settings.yaml.")
]


@app.command("add")
def add_trigger(
    log_index: int = typer.Argument(help="Index of the log source."),
    name: str = typer.Argument(help="Trigger name."),
    pattern: str = typer.Argument(help="Regular expression searched in the log text."),
    trigger_type: str = typer.Option(
        "error", "--type", "-t", help="success, warning or error."
    ),
    description: str = typer.Option("", "--description", "-d"),
    invert: bool = typer.Option(False, "--invert", help="Fire when the pattern does NOT match."),
    config: ConfigOption = None,
) -> None:
    """Add a regex trigger to a log source."""
    try:
        parsed = TriggerType.parse(trigger_type)
        open_actions(load_settings(config)).add_trigger(
            log_index,
            name=name,
            description=description,
            trigger_type=parsed,
            pattern=pattern,
            invert=invert,
        )
    except MinutecatError as exc:
        fail(exc)

    console.print(f"[green]Trigger added:[/green] {name} ({parsed.value})")


@app.command("list")
def list_triggers(
    log_index: int = typer.Argument(help="Index of the log source."),
    config: ConfigOption = None,
) -> None:
    """List the triggers of a log source."""
    try:
        entries = open_actions(load_settings(config)).list_triggers(log_index)
    except MinutecatError as exc:
        fail(exc)

    if not entries:
        console.print("[yellow]No triggers configured.[/yellow]")
        return

    table = Table(title=f"Triggers of log {log_index}")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Description")
    for entry in entries:
        table.add_row(str(entry.index), entry.name, entry.description)
    console.print(table)


@app.command("delete")
def delete_trigger(
    log_index: int = typer.Argument(help="Index of the log source."),
    trigger_index: int = typer.Argument(help="Index shown by 'triggers list'."),
    config: ConfigOption = None,
) -> None:
    """Delete a trigger from a log source."""
    try:
        removed = open_actions(load_settings(config)).delete_trigger(log_index, trigger_index)
    except MinutecatError as exc:
        fail(exc)

    if removed is None:
        console.print(f"[yellow]No trigger at index {trigger_index}.[/yellow]")
        return
    console.print(f"[green]Trigger deleted:[/green] {removed.name}")
