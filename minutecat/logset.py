"""LogSet — the ordered collection of all Logfiles.

Index alignment
---------------
``update`` and ``force_update`` take one handler list per Logfile, aligned
to ``logs`` by index.  Callers that keep parallel per-log state (views,
handler lists) must insert and remove in both collections together.

Failure isolation
-----------------
Logfiles in a batch update concurrently.  A ``MinutecatError`` raised while
one of them loads or checks is logged and delivered to that Logfile's own
handlers as an error Event; the remaining Logfiles are unaffected.

Persistence
-----------
``serialize`` / ``deserialize`` round-trip the whole set through YAML,
including absolute task timestamps and extra data, so a restarted process
resumes its schedule instead of resetting every timer.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from minutecat.exceptions import DeserializationError, MinutecatError, PersistenceError
from minutecat.logfile import EventHandler, Logfile
from minutecat.logging import get_logger

log = get_logger(__name__)


class LogSet(BaseModel):
    logs: list[Logfile] = Field(default_factory=list)

    # ---------------------------------------------------------------------------
    # Structure
    # ---------------------------------------------------------------------------

    def push(self, logfile: Logfile) -> None:
        self.logs.append(logfile)

    def pop(self) -> Logfile | None:
        if not self.logs:
            return None
        return self.logs.pop()

    def remove(self, index: int) -> Logfile | None:
        """Remove and return the Logfile at *index*, or None if out of range."""
        if 0 <= index < len(self.logs):
            return self.logs.pop(index)
        return None

    def __len__(self) -> int:
        return len(self.logs)

    def is_empty(self) -> bool:
        return len(self) == 0

    # ---------------------------------------------------------------------------
    # Batch update
    # ---------------------------------------------------------------------------

    async def update(self, handlers: Sequence[Sequence[EventHandler]]) -> list[bool]:
        """Update every due Logfile.  Returns one flag per Logfile."""
        return await self._run_all(handlers, force=False)

    async def force_update(self, handlers: Sequence[Sequence[EventHandler]]) -> list[bool]:
        """Reload every Logfile regardless of its task."""
        return await self._run_all(handlers, force=True)

    async def _run_all(
        self,
        handlers: Sequence[Sequence[EventHandler]],
        force: bool,
    ) -> list[bool]:
        if len(handlers) != len(self.logs):
            raise ValueError(
                f"Expected one handler list per logfile ({len(self.logs)}), got {len(handlers)}"
            )
        return list(
            await asyncio.gather(
                *(
                    self._run_one(logfile, logfile_handlers, force)
                    for logfile, logfile_handlers in zip(self.logs, handlers)
                )
            )
        )

    async def _run_one(
        self,
        logfile: Logfile,
        handlers: Sequence[EventHandler],
        force: bool,
    ) -> bool:
        try:
            if force:
                return await logfile.force_update(handlers)
            return await logfile.update(handlers)
        except MinutecatError as exc:
            log.warning("logfile_update_failed", name=logfile.name, error=str(exc))
            logfile.report_error(handlers, exc)
            return False

    async def aclose(self) -> None:
        """Release transient source resources (Http clients)."""
        await asyncio.gather(*(logfile.aclose() for logfile in self.logs))

    # ---------------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------------

    def serialize(self) -> str:
        return yaml.safe_dump(
            self.model_dump(mode="json"),
            sort_keys=False,
            allow_unicode=True,
        )

    @classmethod
    def deserialize(cls, s: str) -> "LogSet":
        """Parse a persisted document.

        Raises:
            DeserializationError: the text is not YAML or does not describe a
                log set.
        """
        try:
            data = yaml.safe_load(s)
        except yaml.YAMLError as exc:
            raise DeserializationError(str(exc)) from exc
        if data is None:
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise DeserializationError(str(exc)) from exc

    @classmethod
    def from_path(cls, path: Path) -> "LogSet":
        """Load a log set from *path*; a missing file yields an empty set."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        except (OSError, UnicodeDecodeError) as exc:
            raise DeserializationError(str(exc), path=str(path)) from exc
        try:
            return cls.deserialize(text)
        except DeserializationError as exc:
            exc.path = str(path)
            exc.context["path"] = str(path)
            raise

    def to_file(self, path: Path) -> None:
        """Write the document to *path* atomically (temp file + replace)."""
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(self.serialize(), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise PersistenceError(
                f"Cannot write log set to '{path}': {exc}",
                context={"path": str(path)},
            ) from exc
