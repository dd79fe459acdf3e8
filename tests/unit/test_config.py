"""Unit tests — config.py (Settings, configuration directory)."""

from __future__ import annotations

from pathlib import Path

import pytest

from minutecat.config import (
    CONFIG_DIR_ENV,
    Settings,
    init_config_dir,
    resolve_config_dir,
)
from minutecat.exceptions import ConfigDirectoryError


@pytest.mark.unit
class TestResolveConfigDir:
    def test_env_override(self, tmp_path: Path) -> None:
        assert resolve_config_dir({CONFIG_DIR_ENV: str(tmp_path)}) == tmp_path

    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert resolve_config_dir({}) == tmp_path / ".config" / "minutecat"

    def test_empty_override_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert resolve_config_dir({CONFIG_DIR_ENV: ""}) == tmp_path / ".config" / "minutecat"

    def test_no_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def no_home(cls) -> Path:
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(no_home))
        with pytest.raises(ConfigDirectoryError):
            resolve_config_dir({})

    def test_reads_process_environment(self, config_dir: Path) -> None:
        assert resolve_config_dir() == config_dir


@pytest.mark.unit
class TestInitConfigDir:
    def test_creates(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b"
        assert init_config_dir(path) == path
        assert path.is_dir()

    def test_existing_is_fine(self, tmp_path: Path) -> None:
        assert init_config_dir(tmp_path) == tmp_path

    def test_blocked_by_file(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ConfigDirectoryError) as exc_info:
            init_config_dir(blocker / "sub")
        assert exc_info.value.path == str(blocker / "sub")


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, config_dir: Path) -> None:
        settings = Settings()
        assert settings.http.timeout_seconds == 10.0
        assert settings.monitor.poll_interval_seconds == 1.0
        assert settings.logging.level == "warning"
        assert settings.config_dir() == config_dir
        assert settings.logset_path() == config_dir / "config.yaml"

    def test_explicit_storage(self, tmp_path: Path) -> None:
        settings = Settings(storage={"config_dir": str(tmp_path), "file_name": "logs.yaml"})
        assert settings.logset_path() == tmp_path / "logs.yaml"

    def test_env_override(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MINUTECAT_HTTP__TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("MINUTECAT_MONITOR__POLL_INTERVAL_SECONDS", "0.2")
        settings = Settings()
        assert settings.http.timeout_seconds == 2.5
        assert settings.monitor.poll_interval_seconds == 0.2

    def test_load_from_config_dir(self, config_dir: Path) -> None:
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("http:\n  timeout_seconds: 3\n")
        assert Settings.load().http.timeout_seconds == 3

    def test_explicit_file_wins(self, config_dir: Path, tmp_path: Path) -> None:
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yaml").write_text("http:\n  timeout_seconds: 3\n")
        explicit = tmp_path / "override.yaml"
        explicit.write_text("http:\n  timeout_seconds: 7\nlogging:\n  level: debug\n")

        settings = Settings.load(config_file=explicit)

        assert settings.http.timeout_seconds == 7
        assert settings.logging.level == "debug"

    def test_load_without_files(self, config_dir: Path) -> None:
        assert Settings.load().monitor.poll_interval_seconds == 1.0

    def test_rejects_non_positive_timeout(self, config_dir: Path) -> None:
        with pytest.raises(ValueError):
            Settings(http={"timeout_seconds": 0})
