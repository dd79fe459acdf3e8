"""Reusable event handlers.

CallbackHandler — forwards each Event to a plain callable
QueueHandler    — publishes each Event to an ``asyncio.Queue`` so a consumer
                  (render loop, websocket, test) can read them at its own pace
LogView         — per-log display state kept by front ends: the latest text,
                  the next due time, the matched slices and the most severe
                  trigger type currently firing
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

from minutecat.logfile import Event
from minutecat.triggers import TriggerType

ERROR_SLICE = "Error"
SLICES_KEY = "slices"


class CallbackHandler:
    def __init__(self, callback: Callable[[Event], None]) -> None:
        self._callback = callback

    def on_event(self, event: Event) -> None:
        self._callback(event)


class QueueHandler:
    """Publishes events to an asyncio queue.

    When the queue is bounded and full the oldest event is dropped so the
    engine never blocks on a slow consumer.
    """

    def __init__(self, queue: asyncio.Queue[Event] | None = None) -> None:
        self.queue: asyncio.Queue[Event] = queue if queue is not None else asyncio.Queue()
        self.dropped = 0

    def on_event(self, event: Event) -> None:
        if self.queue.full():
            self.queue.get_nowait()
            self.dropped += 1
        self.queue.put_nowait(event)


@dataclass
class LogView:
    """Display state for one Logfile, updated from its events."""

    name: str = ""
    text: str = ""
    next_time: int = 0
    trigger_type: TriggerType = TriggerType.NO_EVENT
    slices: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    _active: dict[int, TriggerType] = field(default_factory=dict, repr=False)

    def on_event(self, event: Event) -> None:
        self.name = event.name

        if event.error is not None:
            self.error = str(event.error)
            self.slices[ERROR_SLICE] = self.error
            return

        if event.position == 0:
            # a new evaluation: drop results of triggers that no longer exist
            self.slices = {}
            self._active = {}
        self.error = None
        self.text = event.text
        self.next_time = event.task.next_time()

        trigger = event.trigger
        if trigger is not None and event.did_trigger:
            self.slices[trigger.name] = trigger.slice(event.text)
            self._active[event.position] = trigger.get_type()

        self.trigger_type = max(
            self._active.values(),
            key=lambda t: t.severity,
            default=TriggerType.NO_EVENT,
        )
        if trigger is not None or SLICES_KEY in event.extra:
            event.extra.put(SLICES_KEY, self.slices)
