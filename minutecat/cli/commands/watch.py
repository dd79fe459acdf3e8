"""CLI — Run the monitor and print trigger results."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from minutecat.cli.common import console, fail, load_settings, open_store
from minutecat.config import Settings
from minutecat.exceptions import MinutecatError
from minutecat.handlers import CallbackHandler, LogView
from minutecat.logfile import Event, EventHandler, Logfile
from minutecat.monitor import Monitor
from minutecat.task import format_time
from minutecat.triggers import TriggerType

_STYLES: dict[TriggerType, str] = {
    TriggerType.NO_EVENT: "dim",
    TriggerType.SUCCESS: "green",
    TriggerType.WARNING: "yellow",
    TriggerType.ERROR: "red",
}


def _print_event(event: Event) -> None:
    if event.error is not None:
        console.print(f"[red]{escape(event.name)}: {escape(str(event.error))}[/red]")
        return
    if not event.did_trigger or event.trigger is None:
        return
    trigger_type = event.trigger.get_type()
    style = _STYLES[trigger_type]
    console.print(
        f"[{style}]{escape(event.name)} \\[{trigger_type.value}][/{style}] "
        f"{escape(event.trigger.name)}: {escape(event.trigger.slice(event.text))}"
    )


def _handlers(logfile: Logfile) -> list[EventHandler]:
    return [LogView(name=logfile.name), CallbackHandler(_print_event)]


def _summary(monitor: Monitor) -> Table:
    table = Table(title="minutecat")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Next check in")
    table.add_column("Matches")

    now = int(time.time() * 1000)
    for index in range(len(monitor)):
        view = next(h for h in monitor.handlers(index) if isinstance(h, LogView))
        style = _STYLES[view.trigger_type]
        status = "Error" if view.error else view.trigger_type.value
        if view.error:
            style = "red"
        table.add_row(
            str(index),
            escape(view.name),
            f"[{style}]{status}[/{style}]",
            format_time(max(view.next_time - now, 0)),
            escape(", ".join(f"{k}={v}" for k, v in view.slices.items())),
        )
    return table


async def _watch(settings: Settings, once: bool, duration: float | None) -> Monitor:
    monitor = Monitor.from_settings(settings, open_store(settings), handler_factory=_handlers)
    try:
        if once:
            await monitor.poll_once(force=True)
            return monitor
        await monitor.start()
        if duration is not None:
            await asyncio.sleep(duration)
        else:
            await asyncio.Event().wait()
    finally:
        await monitor.stop()
    return monitor


def watch(
    once: bool = typer.Option(False, "--once", help="Load every source once, print and exit."),
    duration: float | None = typer.Option(
        None, "--duration", min=0, help="Stop after this many seconds."
    ),
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to settings.yaml.")
    ] = None,
) -> None:
    """Watch every configured log source and print trigger results."""
    try:
        settings = load_settings(config)
        monitor = asyncio.run(_watch(settings, once, duration))
    except MinutecatError as exc:
        fail(exc)
    except KeyboardInterrupt:
        console.print("[yellow]Stopped.[/yellow]")
        return

    if len(monitor) == 0:
        console.print("[yellow]No log sources configured.[/yellow]")
        return
    console.print(_summary(monitor))
