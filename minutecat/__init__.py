"""minutecat — Log monitoring engine.

Watches a set of logs (local files, HTTP endpoints, in-memory fixtures),
reloads each one on its own schedule, classifies the current text with
regular-expression triggers and reports the results to event handlers.

Layers (bottom to top):
    1. Task      — duration strings, time sources, due-time state machine
    2. Sources   — File (reverse tail read), Http (httpx), InMemory
    3. Triggers  — Regex classifiers with severity types
    4. Logfile   — one source + triggers + task + handler data
    5. LogSet    — the collection, batch updates, YAML persistence
    6. Commands  — undoable mutations, used by actions / Monitor / CLI
"""

__version__ = "0.1.0"

from minutecat.logfile import Event, EventHandler, Logfile
from minutecat.logset import LogSet
from minutecat.task import Task
from minutecat.triggers import RegexTrigger, TriggerType

__all__ = [
    "__version__",
    "Event",
    "EventHandler",
    "Logfile",
    "LogSet",
    "RegexTrigger",
    "Task",
    "TriggerType",
]
