"""minutecat — Engine configuration.

Configuration is loaded from (in order of increasing priority):
    1. Built-in defaults (this file)
    2. User settings: <config dir>/settings.yaml
    3. An explicit settings file passed to ``Settings.load()``
    4. Environment variables prefixed with MINUTECAT_

The configuration directory is ``$MINUTECATDIR`` when set, otherwise
``~/.config/minutecat``.  The log set itself lives in ``config.yaml`` inside
that directory.

Settings are loaded once at startup and passed explicitly to the pieces that
need them; the engine keeps no module-level configuration state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from minutecat.exceptions import ConfigDirectoryError

CONFIG_DIR_ENV = "MINUTECATDIR"
LOGSET_FILE_NAME = "config.yaml"
SETTINGS_FILE_NAME = "settings.yaml"


def resolve_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the configuration directory.

    ``$MINUTECATDIR`` wins when set and non-empty; otherwise the per-user
    default ``~/.config/minutecat`` is used.

    Raises:
        ConfigDirectoryError: the home directory cannot be determined.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigDirectoryError(f"unable to get home directory: {exc}") from exc
    return home / ".config" / "minutecat"


def init_config_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing and return it."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigDirectoryError(str(exc), path=str(path)) from exc
    return path


# ---------------------------------------------------------------------------
# Sub-configuration blocks
# ---------------------------------------------------------------------------


class StorageConfig(BaseModel):
    config_dir: Path | None = Field(
        default=None,
        description="Directory holding the log set. None = resolve from MINUTECATDIR / home.",
    )
    file_name: str = Field(
        default=LOGSET_FILE_NAME,
        description="File name of the persisted log set inside config_dir.",
    )


class HttpConfig(BaseModel):
    timeout_seconds: Annotated[float, Field(gt=0, le=600)] = Field(
        default=10.0,
        description="Timeout applied to every HTTP source fetch.",
    )


class MonitorConfig(BaseModel):
    poll_interval_seconds: Annotated[float, Field(gt=0, le=3600)] = Field(
        default=1.0,
        description="How often the monitor asks the log set whether any source is due.",
    )


class LoggingConfig(BaseModel):
    level: Literal["debug", "info", "warning", "error", "critical"] = "warning"
    format: Literal["json", "console"] = "console"
    file: Path | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MINUTECAT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Settings":
        """Load settings from file(s) + environment variables."""
        data: dict[str, object] = {}

        candidates = [resolve_config_dir() / SETTINGS_FILE_NAME]
        if config_file:
            candidates.append(config_file)

        for path in candidates:
            if path.exists():
                import yaml  # lazy import

                with path.open() as f:
                    loaded = yaml.safe_load(f) or {}
                    data.update(loaded)

        return cls(**data)

    def config_dir(self) -> Path:
        """Return the effective configuration directory."""
        if self.storage.config_dir is not None:
            return self.storage.config_dir.expanduser()
        return resolve_config_dir()

    def logset_path(self) -> Path:
        """Return the path of the persisted log set."""
        return self.config_dir() / self.storage.file_name
