"""minutecat CLI — Entry point.

Usage:
    minutecat sources add <name> <location> [--lines N] [--refresh 1m] [--type local|http]
    minutecat sources list
    minutecat sources delete <index>
    minutecat triggers add <log_index> <name> <pattern> [--type error] [--invert]
    minutecat triggers list <log_index>
    minutecat triggers delete <log_index> <trigger_index>
    minutecat watch [--once] [--duration SECONDS]
"""

from __future__ import annotations

import typer

from minutecat.cli.commands import sources, triggers, watch

app = typer.Typer(
    name="minutecat",
    help="minutecat — Watch log files and HTTP endpoints for regex triggers.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

app.add_typer(sources.app, name="sources")
app.add_typer(triggers.app, name="triggers")
app.command("watch")(watch.watch)


@app.callback()
def main_callback() -> None:
    pass


if __name__ == "__main__":
    app()
