"""Unit tests — CLI sources commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from minutecat.cli.commands.sources import app
from minutecat.logset import LogSet
from minutecat.sources import FileDataSource, HttpDataSource

runner = CliRunner()


def _persisted(config_dir: Path) -> LogSet:
    return LogSet.from_path(config_dir / "config.yaml")


@pytest.mark.unit
class TestSourcesAdd:
    def test_add_local(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["add", "syslog", "/var/log/syslog", "--lines", "20", "--refresh", "30s"])

        assert result.exit_code == 0
        assert "Source added" in result.output
        assert "0h0m30s0ms" in result.output
        source = _persisted(config_dir).logs[0].source
        assert isinstance(source, FileDataSource)
        assert source.line_limit == 20

    def test_add_http_uses_settings_timeout(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MINUTECAT_HTTP__TIMEOUT_SECONDS", "4")
        result = runner.invoke(app, ["add", "web", "http://localhost/log", "--type", "http"])

        assert result.exit_code == 0
        source = _persisted(config_dir).logs[0].source
        assert isinstance(source, HttpDataSource)
        assert source.timeout_seconds == 4

    def test_add_http_explicit_timeout(self, config_dir: Path) -> None:
        result = runner.invoke(
            app, ["add", "web", "http://localhost/log", "--type", "http", "--timeout", "1.5"]
        )
        assert result.exit_code == 0
        assert _persisted(config_dir).logs[0].source.timeout_seconds == 1.5

    def test_add_bad_refresh(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["add", "syslog", "/var/log/syslog", "--refresh", "1h20m10@5"])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert _persisted(config_dir).is_empty()

    def test_add_bad_type(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["add", "x", "y", "--type", "ftp"])
        assert result.exit_code == 1

    def test_add_bad_url(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["add", "web", "http://[::1", "--type", "http"])
        assert result.exit_code == 1
        assert "Invalid source" in result.output
        assert _persisted(config_dir).is_empty()


@pytest.mark.unit
class TestSourcesListDelete:
    def test_list_empty(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No log sources" in result.output

    def test_list(self, config_dir: Path) -> None:
        runner.invoke(app, ["add", "syslog", "/var/log/syslog"])
        runner.invoke(app, ["add", "auth", "/var/log/auth.log"])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "syslog" in result.output
        assert "auth" in result.output

    def test_delete(self, config_dir: Path) -> None:
        runner.invoke(app, ["add", "syslog", "/var/log/syslog"])
        runner.invoke(app, ["add", "auth", "/var/log/auth.log"])

        result = runner.invoke(app, ["delete", "0"])

        assert result.exit_code == 0
        assert "syslog" in result.output
        assert [lf.name for lf in _persisted(config_dir).logs] == ["auth"]

    def test_delete_out_of_range(self, config_dir: Path) -> None:
        result = runner.invoke(app, ["delete", "3"])
        assert result.exit_code == 1
        assert "Index out of bounds" in result.output
