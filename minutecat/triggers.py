"""Triggers — text classifiers evaluated against a log's current text.

Key classes
-----------
TriggerType   — severity classification (NoEvent / Success / Warning / Error)
Trigger       — abstract classifier: ``check``, ``slice``, ``get_type``
RegexTrigger  — regular-expression classifier with an ``invert`` flag

``invert`` flips the result of ``check`` only.  ``slice`` always returns the
raw match (or ``""``), so an inverted trigger that "fires" because nothing
matched reports an empty slice.

Patterns are compiled on every call; ``re`` keeps its own compiled-pattern
cache, so no per-instance cache is kept here.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Literal

from pydantic import BaseModel

from minutecat.exceptions import PatternError, TriggerTypeError


class TriggerType(str, Enum):
    """How a firing trigger should be interpreted."""

    NO_EVENT = "NoEvent"
    SUCCESS = "Success"
    WARNING = "Warning"
    ERROR = "Error"

    @property
    def severity(self) -> int:
        """Display ordering: NoEvent < Success < Warning < Error."""
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: str) -> "TriggerType":
        """Parse a trigger type name, ignoring case ("error", "NoEvent", ...)."""
        wanted = value.strip().replace("_", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise TriggerTypeError(value)


_SEVERITY: dict[TriggerType, int] = {
    TriggerType.NO_EVENT: 0,
    TriggerType.SUCCESS: 1,
    TriggerType.WARNING: 2,
    TriggerType.ERROR: 3,
}


class Trigger(BaseModel, ABC):
    """Abstract text classifier.  Pure: never mutates Logfile state."""

    name: str
    description: str = ""
    trigger_type: TriggerType = TriggerType.NO_EVENT

    @abstractmethod
    def check(self, text: str) -> bool:
        """Return True when the trigger fires for *text*."""

    @abstractmethod
    def slice(self, text: str) -> str:
        """Return the part of *text* that caused the match, or ``""``."""

    def get_type(self) -> TriggerType:
        return self.trigger_type


class RegexTrigger(Trigger):
    type: Literal["Regex"] = "Regex"
    pattern: str
    invert: bool = False

    def _compile(self) -> re.Pattern[str]:
        try:
            return re.compile(self.pattern)
        except re.error as exc:
            raise PatternError(self.pattern, str(exc)) from exc

    def validate_pattern(self) -> None:
        """Raise ``PatternError`` if the pattern does not compile."""
        self._compile()

    def check(self, text: str) -> bool:
        return (self._compile().search(text) is not None) != self.invert

    def slice(self, text: str) -> str:
        match = self._compile().search(text)
        if match is None:
            return ""
        return match.group(0)


# Single variant for now; becomes a discriminated union on ``type`` once a
# second trigger kind exists.  The ``type`` tag is already persisted.
TriggerTypes = RegexTrigger
