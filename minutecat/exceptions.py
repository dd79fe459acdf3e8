"""minutecat — Exception hierarchy.

All exceptions raised by the engine inherit from MinutecatError so that
callers can catch the full family with a single except clause when needed.

Hierarchy:
    MinutecatError
    ├── ConfigError
    │   └── ConfigDirectoryError
    ├── SourceError
    │   ├── InMemoryDataError
    │   ├── SourceReadError
    │   ├── SourceDecodeError
    │   └── HttpFetchError
    │       └── HttpTimeoutError
    ├── ParseError
    │   ├── TimeStringError
    │   ├── PatternError
    │   ├── TriggerTypeError
    │   ├── FileTypeError
    │   └── SourceOptionsError
    ├── PersistenceError
    │   └── DeserializationError
    ├── ExtraDataNotFoundError
    └── LogfileIndexError
"""

from __future__ import annotations

from typing import Any


class MinutecatError(Exception):
    """Base exception for all minutecat errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context})"


# ---------------------------------------------------------------------------
# Configuration / startup
# ---------------------------------------------------------------------------


class ConfigError(MinutecatError):
    """Base for configuration and startup errors."""


class ConfigDirectoryError(ConfigError):
    """The configuration directory could not be resolved or created."""

    def __init__(self, reason: str, path: str | None = None) -> None:
        super().__init__(
            f"Unable to use configuration directory: {reason}",
            context={"reason": reason, "path": path},
        )
        self.path = path


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------


class SourceError(MinutecatError):
    """Base for every failure while loading a source's text."""


class InMemoryDataError(SourceError):
    """An in-memory source has no canned responses left."""

    def __init__(self) -> None:
        super().__init__("InMemoryDataError: no data left in source")


class SourceReadError(SourceError):
    """A file source could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot read '{path}': {reason}",
            context={"path": path, "reason": reason},
        )
        self.path = path


class SourceDecodeError(SourceError):
    """A chunk of source bytes is not valid UTF-8.

    Raised when a read chunk starts or ends inside a multi-byte character.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cannot decode source text: {reason}", context={"reason": reason})


class HttpFetchError(SourceError):
    """An HTTP source returned an error status or the transport failed."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(
            f"Fetching '{url}' failed: {reason}",
            context={"url": url, "reason": reason, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class HttpTimeoutError(HttpFetchError):
    """An HTTP source did not answer within its timeout."""

    def __init__(self, url: str, timeout_seconds: float) -> None:
        super().__init__(url, f"timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class ParseError(MinutecatError):
    """Base for malformed user input (durations, patterns, enum names)."""


class TimeStringError(ParseError):
    """A duration string contains an unknown unit or cannot be parsed."""

    def __init__(self, time_str: str, operator: str = "") -> None:
        super().__init__(
            f"Unknown Operator {operator!r} in time string {time_str!r}",
            context={"time_str": time_str, "operator": operator},
        )
        self.time_str = time_str
        self.operator = operator


class PatternError(ParseError):
    """A trigger pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(
            f"Invalid pattern {pattern!r}: {reason}",
            context={"pattern": pattern, "reason": reason},
        )
        self.pattern = pattern


class TriggerTypeError(ParseError):
    """A trigger type name is unknown or not allowed here."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown trigger type: {value!r}", context={"value": value})
        self.value = value


class FileTypeError(ParseError):
    """A source type selector is neither 'local' nor 'http'."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown file type: {value!r}", context={"value": value})
        self.value = value


class SourceOptionsError(ParseError):
    """A source location or option is malformed (bad URL, negative line limit)."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Invalid source {location!r}: {reason}",
            context={"location": location, "reason": reason},
        )
        self.location = location
        self.reason = reason


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class PersistenceError(MinutecatError):
    """Base for errors reading or writing the persisted document."""


class DeserializationError(PersistenceError):
    """The persisted document is not valid YAML or does not match the schema."""

    def __init__(self, reason: str, path: str | None = None) -> None:
        super().__init__(
            f"Cannot deserialize log set: {reason}",
            context={"reason": reason, "path": path},
        )
        self.path = path


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class ExtraDataNotFoundError(MinutecatError):
    """No auxiliary data is stored under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"UndefinedExtraData: {key!r}", context={"key": key})
        self.key = key


class LogfileIndexError(MinutecatError):
    """A log index is outside the log set."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            f"Index out of bounds: {index} (log set has {length} entries)",
            context={"index": index, "length": length},
        )
        self.index = index
        self.length = length
