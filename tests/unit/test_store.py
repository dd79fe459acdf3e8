"""Unit tests — store.py (LogSetStore)."""

from __future__ import annotations

from pathlib import Path

import pytest

from minutecat.config import Settings
from minutecat.exceptions import DeserializationError
from minutecat.logset import LogSet
from minutecat.store import LogSetStore


@pytest.mark.unit
class TestLogSetStore:
    def test_from_settings_creates_directory(self, test_settings: Settings, config_dir: Path) -> None:
        store = LogSetStore.from_settings(test_settings)
        assert config_dir.is_dir()
        assert store.path == config_dir / "config.yaml"

    def test_load_missing_is_empty(self, store: LogSetStore) -> None:
        assert store.load().is_empty()

    def test_save_and_load(self, store: LogSetStore, logfile_factory, error_trigger) -> None:
        logset = LogSet()
        lf = logfile_factory(name="syslog", data=["x"])
        lf.push(error_trigger)
        logset.push(lf)

        store.save(logset)
        loaded = store.load()

        assert [log.name for log in loaded.logs] == ["syslog"]
        assert loaded.logs[0].triggers[0].name == "errors"

    def test_save_creates_parent(self, tmp_path: Path) -> None:
        store = LogSetStore(tmp_path / "nested" / "dir" / "config.yaml")
        store.save(LogSet())
        assert store.path.exists()

    def test_corrupt_file_is_quarantined(self, store: LogSetStore) -> None:
        store.path.write_text("logs: [unclosed", encoding="utf-8")

        logset = store.load()

        assert logset.is_empty()
        assert not store.path.exists()
        moved = list(store.path.parent.glob("config.yaml.corrupt-*"))
        assert len(moved) == 1
        assert moved[0].read_text(encoding="utf-8") == "logs: [unclosed"

    def test_corrupt_file_without_quarantine(self, store: LogSetStore) -> None:
        store.path.write_text("logs: 3", encoding="utf-8")
        with pytest.raises(DeserializationError):
            store.load(quarantine=False)
        assert store.path.exists()

    def test_save_after_quarantine(self, store: LogSetStore, logfile_factory) -> None:
        store.path.write_text("{{{", encoding="utf-8")
        logset = store.load()
        logset.push(logfile_factory(name="fresh"))
        store.save(logset)
        assert [log.name for log in store.load().logs] == ["fresh"]

    def test_expands_user(self) -> None:
        store = LogSetStore(Path("~/minutecat/config.yaml"))
        assert "~" not in str(store.path)
