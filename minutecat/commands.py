"""Commands — undoable mutations of a LogSet or a Logfile.

A command is a self-contained data object: it holds everything needed to
perform one mutation and to revert it, and never keeps a reference to the
object it acts on.  Front ends use commands instead of mutating log sets
directly.

Rules every command follows:
- ``execute`` either fully applies or raises without touching the target.
- ``undo`` without a preceding successful ``execute`` is a no-op, and so is
  a second ``undo``.
- Undo is positional.  ``AddFileCommand.undo`` pops the last Logfile, so
  commands must be undone in reverse order against an otherwise unchanged
  target.  Removal commands re-insert by appending, not at the original
  index.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from pydantic import ValidationError

from minutecat.exceptions import FileTypeError, SourceOptionsError
from minutecat.logfile import Logfile
from minutecat.logging import get_logger
from minutecat.logset import LogSet
from minutecat.sources import DataSourceTypes, FileDataSource, HttpDataSource
from minutecat.sources.http import DEFAULT_TIMEOUT_SECONDS
from minutecat.task import ClockTimeSource, Task
from minutecat.triggers import RegexTrigger, TriggerType, TriggerTypes

log = get_logger(__name__)

T = TypeVar("T")


class Command(ABC, Generic[T]):
    @abstractmethod
    def execute(self, target: T) -> None: ...

    @abstractmethod
    def undo(self, target: T) -> None: ...


class FileType(str, Enum):
    """Kind of source created by AddFileCommand."""

    LOCAL = "local"
    HTTP = "http"

    @classmethod
    def parse(cls, value: str) -> "FileType":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise FileTypeError(value) from None


# ---------------------------------------------------------------------------
# LogSet commands
# ---------------------------------------------------------------------------


@dataclass
class AddFileCommand(Command[LogSet]):
    name: str
    location: str
    line_limit: int
    refresh_time: str
    file_type: FileType = FileType.LOCAL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    can_undo: bool = field(default=False, init=False)

    def _build_source(self) -> DataSourceTypes:
        try:
            if self.file_type is FileType.HTTP:
                return HttpDataSource(url=self.location, timeout_seconds=self.timeout_seconds)
            return FileDataSource(path=self.location, line_limit=self.line_limit)
        except ValidationError as exc:
            reason = "; ".join(err["msg"] for err in exc.errors())
            raise SourceOptionsError(self.location, reason) from exc

    def execute(self, logset: LogSet) -> None:
        # Parse everything first: a bad refresh time must leave logset untouched.
        task = Task.from_str(True, self.refresh_time, ClockTimeSource())
        source = self._build_source()
        logset.push(Logfile(name=self.name, source=source, task=task))
        self.can_undo = True
        log.info("logfile_added", name=self.name, location=self.location, type=self.file_type.value)

    def undo(self, logset: LogSet) -> None:
        if self.can_undo:
            self.can_undo = False
            logset.pop()


@dataclass
class DeleteLogfileCommand(Command[LogSet]):
    index: int
    removed: Logfile | None = field(default=None, init=False)

    def execute(self, logset: LogSet) -> None:
        self.removed = logset.remove(self.index)
        if self.removed is not None:
            log.info("logfile_deleted", index=self.index, name=self.removed.name)

    def undo(self, logset: LogSet) -> None:
        if self.removed is not None:
            logset.push(self.removed)
            self.removed = None


# ---------------------------------------------------------------------------
# Logfile commands
# ---------------------------------------------------------------------------


@dataclass
class AddRegexTriggerCommand(Command[Logfile]):
    name: str
    description: str
    trigger_type: TriggerType
    pattern: str
    invert: bool = False
    can_undo: bool = field(default=False, init=False)

    def execute(self, logfile: Logfile) -> None:
        trigger = RegexTrigger(
            name=self.name,
            description=self.description,
            trigger_type=self.trigger_type,
            pattern=self.pattern,
            invert=self.invert,
        )
        trigger.validate_pattern()
        logfile.push(trigger)
        self.can_undo = True
        log.info("trigger_added", logfile=logfile.name, name=self.name, pattern=self.pattern)

    def undo(self, logfile: Logfile) -> None:
        if self.can_undo:
            logfile.pop()
            self.can_undo = False


@dataclass
class RemoveTriggerCommand(Command[Logfile]):
    index: int
    removed: TriggerTypes | None = field(default=None, init=False)

    def execute(self, logfile: Logfile) -> None:
        self.removed = logfile.remove(self.index)
        if self.removed is not None:
            log.info("trigger_removed", logfile=logfile.name, index=self.index)

    def undo(self, logfile: Logfile) -> None:
        if self.removed is not None:
            logfile.push(self.removed)
            self.removed = None
