"""CLI — helpers shared by every command group."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from minutecat.actions import LogSetActions
from minutecat.config import Settings
from minutecat.logging import configure_logging
from minutecat.store import LogSetStore

console = Console()


def load_settings(config: Path | None) -> Settings:
    """Load settings and configure logging from them."""
    settings = Settings.load(config_file=config)
    log_file = settings.logging.file
    configure_logging(
        level=settings.logging.level,
        format=settings.logging.format,
        log_file=str(log_file) if log_file else None,
    )
    return settings


def open_store(settings: Settings) -> LogSetStore:
    return LogSetStore.from_settings(settings)


def open_actions(settings: Settings) -> LogSetActions:
    return LogSetActions(open_store(settings))


def fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(exc))}[/red]")
    raise typer.Exit(1)
