"""Scheduling primitives — time sources and the due-time state machine.

A ``Task`` decides when its Logfile should reload.  It stores an absolute
``start`` timestamp (milliseconds) plus a ``delay``; the task is due once
``start + delay`` lies in the past.  Because ``start`` is absolute, a task
that is persisted and reloaded resumes relative to wall-clock time instead
of restarting its timer.

State machine::

    Pending-repeating ──is_due()──► Pending-repeating   (start moves forward)
    Pending-once      ──is_due()──► Fired-terminal      (done = True)
    Fired-terminal    ──is_due()──► Fired-terminal      (always False)

Duration strings
----------------
``scan("1h20m10s5")`` → 4 810 005 ms.  Units: ``h``, ``m``, ``s``, ``ms``;
a trailing bare number is milliseconds.
"""

from __future__ import annotations

import re
import time
from abc import ABC, abstractmethod
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from minutecat.exceptions import TimeStringError

TimeMs = int

UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
}

# Largest unit first, used by get_time_str().
_FORMAT_ORDER: tuple[str, ...] = ("h", "m", "s", "ms")

_DIGITS_RE = re.compile(r"\d+")
_OPERATOR_RE = re.compile(r"\D+")


# ---------------------------------------------------------------------------
# Time sources
# ---------------------------------------------------------------------------


class TimeSource(BaseModel, ABC):
    """Produces a millisecond timestamp on demand.  Never fails."""

    @abstractmethod
    def now(self) -> TimeMs:
        """Return the current time in milliseconds."""


class ClockTimeSource(TimeSource):
    """Wall-clock milliseconds since the Unix epoch."""

    type: Literal["Clock"] = "Clock"

    def now(self) -> TimeMs:
        return int(time.time() * 1000)


class InMemoryTimeSource(TimeSource):
    """Deterministic clock for tests.

    ``times`` is consumed from the end, so a list seeded as
    ``[122, 111, 111, 100]`` yields 100, 111, 111, 122.  Once exhausted the
    last yielded value repeats.
    """

    type: Literal["InMemory"] = "InMemory"
    times: list[TimeMs] = Field(default_factory=list)
    last: TimeMs = 0

    def now(self) -> TimeMs:
        if self.times:
            self.last = self.times.pop()
        return self.last


TimeSourceTypes = Annotated[
    Union[ClockTimeSource, InMemoryTimeSource],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Duration strings
# ---------------------------------------------------------------------------


def scan(time_str: str) -> TimeMs:
    """Parse alternating number/unit tokens into milliseconds.

    Raises:
        TimeStringError: a unit is unknown, or a unit is not preceded by a
            number.
    """
    total = 0
    pos = 0
    while pos < len(time_str):
        number = _DIGITS_RE.match(time_str, pos)
        if number is None:
            # parsing stalled on a non-numeric token
            raise TimeStringError(time_str, time_str[pos:])
        pos = number.end()

        operator = _OPERATOR_RE.match(time_str, pos)
        if operator is None:
            unit = 1
        else:
            op = operator.group(0)
            if op not in UNITS:
                raise TimeStringError(time_str, op)
            unit = UNITS[op]
            pos = operator.end()

        total += int(number.group(0)) * unit
    return total


def format_time(delay: TimeMs) -> str:
    """Inverse of :func:`scan`; every component is always emitted."""
    parts = []
    remainder = delay
    for name in _FORMAT_ORDER:
        value, remainder = divmod(remainder, UNITS[name])
        parts.append(f"{value}{name}")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------


class Task(BaseModel):
    """Due-time state machine owned by exactly one Logfile."""

    repeat: bool = True
    done: bool = False
    delay: TimeMs = 0
    start: TimeMs | None = None
    time_src: TimeSourceTypes = Field(default_factory=ClockTimeSource)

    def model_post_init(self, __context: object) -> None:
        if self.start is None:
            self.start = self.time_src.now()

    @classmethod
    def from_str(
        cls,
        repeat: bool,
        time_str: str,
        time_src: TimeSource | None = None,
    ) -> "Task":
        """Build a task whose delay is parsed from *time_str*."""
        delay = scan(time_str)
        return cls(repeat=repeat, delay=delay, time_src=time_src or ClockTimeSource())

    def next_time(self) -> TimeMs:
        return (self.start or 0) + self.delay

    def is_due(self) -> bool:
        """Return True when the task should run now, advancing its state.

        A non-repeating task returns True at most once.
        """
        if self.done:
            return False
        if self.next_time() < self.time_src.now():
            self.start = self.time_src.now()
            self.done = not self.repeat
            return True
        return False

    def get_time_str(self) -> str:
        return format_time(self.delay)
