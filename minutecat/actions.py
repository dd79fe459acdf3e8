"""Command-style actions shared by every front end.

Each mutating action loads the persisted LogSet, runs the matching Command
and saves the result straight away:

    add_source      → AddFileCommand
    delete_source   → DeleteLogfileCommand
    add_trigger     → AddRegexTriggerCommand
    delete_trigger  → RemoveTriggerCommand

``list_sources`` and ``list_triggers`` only read.
"""

from __future__ import annotations

from dataclasses import dataclass

from minutecat.commands import (
    AddFileCommand,
    AddRegexTriggerCommand,
    DeleteLogfileCommand,
    FileType,
    RemoveTriggerCommand,
)
from minutecat.exceptions import LogfileIndexError, TriggerTypeError
from minutecat.logfile import Logfile
from minutecat.logset import LogSet
from minutecat.sources.http import DEFAULT_TIMEOUT_SECONDS
from minutecat.store import LogSetStore
from minutecat.triggers import TriggerType, TriggerTypes


@dataclass
class ListEntry:
    index: int
    name: str
    description: str = ""


class LogSetActions:
    def __init__(self, store: LogSetStore) -> None:
        self._store = store

    def _logfile(self, logset: LogSet, index: int) -> Logfile:
        if not 0 <= index < len(logset):
            raise LogfileIndexError(index, len(logset))
        return logset.logs[index]

    # ---------------------------------------------------------------------------
    # Sources
    # ---------------------------------------------------------------------------

    def add_source(
        self,
        name: str,
        location: str,
        line_limit: int,
        refresh_time: str,
        file_type: FileType = FileType.LOCAL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> Logfile:
        logset = self._store.load()
        cmd = AddFileCommand(
            name=name,
            location=location,
            line_limit=line_limit,
            refresh_time=refresh_time,
            file_type=file_type,
            timeout_seconds=timeout_seconds,
        )
        cmd.execute(logset)
        self._store.save(logset)
        return logset.logs[-1]

    def list_sources(self) -> list[ListEntry]:
        logset = self._store.load()
        return [ListEntry(i, log.name) for i, log in enumerate(logset.logs)]

    def delete_source(self, index: int) -> Logfile | None:
        logset = self._store.load()
        self._logfile(logset, index)
        cmd = DeleteLogfileCommand(index)
        cmd.execute(logset)
        self._store.save(logset)
        return cmd.removed

    # ---------------------------------------------------------------------------
    # Triggers
    # ---------------------------------------------------------------------------

    def add_trigger(
        self,
        index: int,
        name: str,
        description: str,
        trigger_type: TriggerType,
        pattern: str,
        invert: bool = False,
    ) -> None:
        if trigger_type is TriggerType.NO_EVENT:
            raise TriggerTypeError(trigger_type.value)
        logset = self._store.load()
        logfile = self._logfile(logset, index)
        cmd = AddRegexTriggerCommand(
            name=name,
            description=description,
            trigger_type=trigger_type,
            pattern=pattern,
            invert=invert,
        )
        cmd.execute(logfile)
        self._store.save(logset)

    def list_triggers(self, index: int) -> list[ListEntry]:
        logset = self._store.load()
        logfile = self._logfile(logset, index)
        return [
            ListEntry(i, trigger.name, trigger.description)
            for i, trigger in enumerate(logfile.triggers)
        ]

    def delete_trigger(self, log_index: int, trigger_index: int) -> TriggerTypes | None:
        """Remove a trigger; returns None when *trigger_index* is out of range."""
        logset = self._store.load()
        logfile = self._logfile(logset, log_index)
        cmd = RemoveTriggerCommand(trigger_index)
        cmd.execute(logfile)
        if cmd.removed is not None:
            self._store.save(logset)
        return cmd.removed
