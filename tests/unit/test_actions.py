"""Unit tests — actions.py (LogSetActions over a file-backed store)."""

from __future__ import annotations

import pytest

from minutecat.actions import ListEntry, LogSetActions
from minutecat.commands import FileType
from minutecat.exceptions import (
    LogfileIndexError,
    PatternError,
    SourceOptionsError,
    TimeStringError,
    TriggerTypeError,
)
from minutecat.sources import FileDataSource, HttpDataSource
from minutecat.store import LogSetStore
from minutecat.triggers import TriggerType


@pytest.fixture
def actions(store: LogSetStore) -> LogSetActions:
    return LogSetActions(store)


def _add_two(actions: LogSetActions) -> None:
    actions.add_source("syslog", "/var/log/syslog", 100, "1m")
    actions.add_source("web", "http://localhost/log", 0, "30s", file_type=FileType.HTTP)


@pytest.mark.unit
class TestSourceActions:
    def test_add_persists(self, actions: LogSetActions, store: LogSetStore) -> None:
        lf = actions.add_source("syslog", "/var/log/syslog", 20, "5s")
        assert lf.name == "syslog"

        persisted = store.load()
        assert len(persisted) == 1
        source = persisted.logs[0].source
        assert isinstance(source, FileDataSource)
        assert source.line_limit == 20
        assert persisted.logs[0].task.delay == 5000

    def test_add_http(self, actions: LogSetActions, store: LogSetStore) -> None:
        actions.add_source("web", "http://localhost/log", 0, "30s", file_type=FileType.HTTP, timeout_seconds=3)
        source = store.load().logs[0].source
        assert isinstance(source, HttpDataSource)
        assert source.timeout_seconds == 3

    def test_add_bad_refresh_saves_nothing(self, actions: LogSetActions, store: LogSetStore) -> None:
        with pytest.raises(TimeStringError):
            actions.add_source("syslog", "/var/log/syslog", 100, "soon")
        assert not store.path.exists()

    def test_add_negative_line_limit_saves_nothing(self, actions: LogSetActions, store: LogSetStore) -> None:
        with pytest.raises(SourceOptionsError):
            actions.add_source("syslog", "/var/log/syslog", -5, "1m")
        assert not store.path.exists()

    def test_list(self, actions: LogSetActions) -> None:
        _add_two(actions)
        assert actions.list_sources() == [ListEntry(0, "syslog"), ListEntry(1, "web")]

    def test_list_empty(self, actions: LogSetActions) -> None:
        assert actions.list_sources() == []

    def test_delete(self, actions: LogSetActions, store: LogSetStore) -> None:
        _add_two(actions)
        removed = actions.delete_source(0)
        assert removed is not None and removed.name == "syslog"
        assert [lf.name for lf in store.load().logs] == ["web"]

    @pytest.mark.parametrize("index", [-1, 2])
    def test_delete_out_of_range(self, actions: LogSetActions, index: int) -> None:
        _add_two(actions)
        with pytest.raises(LogfileIndexError):
            actions.delete_source(index)
        assert len(actions.list_sources()) == 2


@pytest.mark.unit
class TestTriggerActions:
    def test_add_and_list(self, actions: LogSetActions, store: LogSetStore) -> None:
        _add_two(actions)
        actions.add_trigger(1, "err", "errors", TriggerType.ERROR, "error")
        actions.add_trigger(1, "slow", "", TriggerType.WARNING, r"took \d+ms", invert=False)

        assert actions.list_triggers(1) == [
            ListEntry(0, "err", "errors"),
            ListEntry(1, "slow", ""),
        ]
        assert actions.list_triggers(0) == []
        assert store.load().logs[1].triggers[1].pattern == r"took \d+ms"

    def test_add_no_event_rejected(self, actions: LogSetActions) -> None:
        _add_two(actions)
        with pytest.raises(TriggerTypeError):
            actions.add_trigger(0, "x", "", TriggerType.NO_EVENT, "x")
        assert actions.list_triggers(0) == []

    def test_add_bad_pattern(self, actions: LogSetActions) -> None:
        _add_two(actions)
        with pytest.raises(PatternError):
            actions.add_trigger(0, "x", "", TriggerType.ERROR, "[")
        assert actions.list_triggers(0) == []

    def test_add_to_missing_log(self, actions: LogSetActions) -> None:
        with pytest.raises(LogfileIndexError):
            actions.add_trigger(0, "x", "", TriggerType.ERROR, "x")

    def test_list_missing_log(self, actions: LogSetActions) -> None:
        with pytest.raises(LogfileIndexError):
            actions.list_triggers(4)

    def test_delete_uses_trigger_index(self, actions: LogSetActions) -> None:
        _add_two(actions)
        for name in ("a", "b", "c"):
            actions.add_trigger(1, name, "", TriggerType.ERROR, name)

        # log index 1, trigger index 2: the log index must not be used as
        # the trigger index
        removed = actions.delete_trigger(1, 2)

        assert removed is not None and removed.name == "c"
        assert [e.name for e in actions.list_triggers(1)] == ["a", "b"]

    def test_delete_missing_trigger(self, actions: LogSetActions) -> None:
        _add_two(actions)
        assert actions.delete_trigger(0, 0) is None

    def test_delete_trigger_missing_log(self, actions: LogSetActions) -> None:
        with pytest.raises(LogfileIndexError):
            actions.delete_trigger(0, 0)
