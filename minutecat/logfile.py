"""Logfile — one monitored source, its triggers, schedule and handler data.

Update cycle::

    update(handlers)
        ↓  task.is_due()?  no → return False
    force_update(handlers)
        ↓  text = await source.load()      (errors propagate)
    check(handlers, text)
        ↓  one Event per trigger, in list order
        ↓  (or one untriggered Event when there are no triggers)
    handler.on_event(event) for every handler

Handlers see matching *and* non-matching triggers on every cycle and do
their own filtering.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from minutecat.exceptions import MinutecatError
from minutecat.extra import ExtraData
from minutecat.logging import bind_log_context, clear_log_context, get_logger
from minutecat.sources import DataSourceTypes
from minutecat.task import Task
from minutecat.triggers import Trigger, TriggerTypes

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Event / handler boundary
# ---------------------------------------------------------------------------


@dataclass
class Event:
    """Transient record of one trigger evaluation.  Never persisted.

    ``error`` is set instead of a trigger result when the Logfile failed to
    load or check; ``did_trigger`` is then False and ``text`` is empty.
    ``position`` is the index of the trigger within one check, so 0 marks
    the first event of a new evaluation.
    """

    did_trigger: bool
    trigger: Trigger | None
    task: Task
    extra: ExtraData
    text: str
    name: str
    error: MinutecatError | None = None
    position: int = 0

    @property
    def is_error(self) -> bool:
        return self.error is not None


@runtime_checkable
class EventHandler(Protocol):
    """Observer notified once per trigger evaluation."""

    def on_event(self, event: Event) -> None: ...


def dispatch(handlers: Sequence[EventHandler], event: Event) -> None:
    """Deliver *event* to every handler.

    A handler that raises is logged and skipped; the others still run.
    """
    for handler in handlers:
        try:
            handler.on_event(event)
        except Exception as exc:
            log.error(
                "event_handler_error",
                name=event.name,
                handler=type(handler).__name__,
                error=str(exc),
            )


# ---------------------------------------------------------------------------
# Logfile
# ---------------------------------------------------------------------------


class Logfile(BaseModel):
    name: str
    source: DataSourceTypes
    triggers: list[TriggerTypes] = Field(default_factory=list)
    task: Task = Field(default_factory=Task)
    # extra data may be used by EventHandlers to store data
    extra: ExtraData = Field(default_factory=ExtraData)

    # ---------------------------------------------------------------------------
    # Trigger list
    # ---------------------------------------------------------------------------

    def push(self, trigger: TriggerTypes) -> None:
        self.triggers.append(trigger)

    def pop(self) -> TriggerTypes | None:
        if not self.triggers:
            return None
        return self.triggers.pop()

    def remove(self, index: int) -> TriggerTypes | None:
        """Remove and return the trigger at *index*, or None if out of range."""
        if 0 <= index < len(self.triggers):
            return self.triggers.pop(index)
        return None

    def __len__(self) -> int:
        return len(self.triggers)

    def is_empty(self) -> bool:
        return len(self) == 0

    # ---------------------------------------------------------------------------
    # Update cycle
    # ---------------------------------------------------------------------------

    async def update(self, handlers: Sequence[EventHandler]) -> bool:
        """Reload and check if the task is due.  Returns whether it ran."""
        if not self.task.is_due():
            return False
        return await self.force_update(handlers)

    async def force_update(self, handlers: Sequence[EventHandler]) -> bool:
        bind_log_context(log_name=self.name)
        try:
            text = await self.source.load()
            self.check(handlers, text)
            log.debug("logfile_updated", name=self.name, triggers=len(self.triggers))
        finally:
            clear_log_context()
        return True

    def check(self, handlers: Sequence[EventHandler], text: str) -> None:
        if not self.triggers:
            dispatch(handlers, self._event(False, None, text))
            return

        for position, trigger in enumerate(self.triggers):
            did_trigger = trigger.check(text)
            dispatch(handlers, self._event(did_trigger, trigger, text, position))

    def report_error(self, handlers: Sequence[EventHandler], error: MinutecatError) -> None:
        """Deliver an error indicator Event for this Logfile."""
        event = self._event(False, None, "")
        event.error = error
        dispatch(handlers, event)

    def _event(
        self, did_trigger: bool, trigger: Trigger | None, text: str, position: int = 0
    ) -> Event:
        return Event(
            did_trigger=did_trigger,
            trigger=trigger,
            task=self.task,
            extra=self.extra,
            text=text,
            name=self.name,
            position=position,
        )

    async def aclose(self) -> None:
        await self.source.aclose()
