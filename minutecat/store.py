"""File-backed persistence for the LogSet.

The whole log set lives in one human-editable YAML document
(``<config dir>/config.yaml`` by default).

Startup behaviour
-----------------
- missing file          → empty LogSet
- unreadable / corrupt  → the file is moved aside to
                          ``config.yaml.corrupt-<ms>`` and an empty LogSet is
                          returned, so one bad edit never prevents startup.
                          Pass ``quarantine=False`` to get the
                          ``DeserializationError`` instead.
"""

from __future__ import annotations

import time
from pathlib import Path

from minutecat.config import Settings, init_config_dir
from minutecat.exceptions import DeserializationError
from minutecat.logging import get_logger
from minutecat.logset import LogSet

log = get_logger(__name__)


class LogSetStore:
    """Loads and saves a LogSet at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = path.expanduser()

    @classmethod
    def from_settings(cls, settings: Settings) -> "LogSetStore":
        """Create the configuration directory if needed and open its store."""
        init_config_dir(settings.config_dir())
        return cls(settings.logset_path())

    @property
    def path(self) -> Path:
        return self._path

    def load(self, quarantine: bool = True) -> LogSet:
        try:
            logset = LogSet.from_path(self._path)
        except DeserializationError as exc:
            if not quarantine:
                raise
            moved = self._quarantine()
            log.warning(
                "logset_quarantined",
                path=str(self._path),
                moved_to=str(moved),
                error=exc.message,
            )
            return LogSet()
        log.debug("logset_loaded", path=str(self._path), logs=len(logset))
        return logset

    def save(self, logset: LogSet) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logset.to_file(self._path)
        log.debug("logset_saved", path=str(self._path), logs=len(logset))

    def _quarantine(self) -> Path:
        target = self._path.with_name(f"{self._path.name}.corrupt-{int(time.time() * 1000)}")
        self._path.replace(target)
        return target
