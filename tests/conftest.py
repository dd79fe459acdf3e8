"""Shared pytest fixtures for the minutecat test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from minutecat.config import CONFIG_DIR_ENV, Settings
from minutecat.handlers import CallbackHandler
from minutecat.logfile import Event, Logfile
from minutecat.sources import InMemoryDataSource
from minutecat.store import LogSetStore
from minutecat.task import InMemoryTimeSource, Task
from minutecat.triggers import RegexTrigger, TriggerType


# ---------------------------------------------------------------------------
# Settings / storage
# ---------------------------------------------------------------------------


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "minutecat"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(path))
    return path


@pytest.fixture
def test_settings(config_dir: Path) -> Settings:
    return Settings(
        storage={"config_dir": str(config_dir)},
        logging={"level": "debug", "format": "console"},
    )


@pytest.fixture
def store(test_settings: Settings) -> LogSetStore:
    return LogSetStore.from_settings(test_settings)


# ---------------------------------------------------------------------------
# Engine objects
# ---------------------------------------------------------------------------


@pytest.fixture
def events() -> list[Event]:
    return []


@pytest.fixture
def recorder(events: list[Event]) -> CallbackHandler:
    """Handler that appends every event it receives to ``events``."""
    return CallbackHandler(events.append)


@pytest.fixture
def error_trigger() -> RegexTrigger:
    return RegexTrigger(
        name="errors",
        description="any error line",
        trigger_type=TriggerType.ERROR,
        pattern="error",
    )


def make_logfile(
    name: str = "test",
    data: list[str] | None = None,
    times: list[int] | None = None,
    delay: int = 10,
    repeat: bool = True,
) -> Logfile:
    """Logfile over canned text and a deterministic clock.

    Both ``data`` and ``times`` are consumed from the end.
    """
    task = Task(
        repeat=repeat,
        delay=delay,
        time_src=InMemoryTimeSource(times=list(times or [])),
    )
    return Logfile(
        name=name,
        source=InMemoryDataSource(data=list(data or [])),
        task=task,
    )


@pytest.fixture
def logfile_factory():
    return make_logfile
