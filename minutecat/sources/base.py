"""DataSource — abstract base class for all log sources.

A data source knows how to fetch the current text of a log from a location
(local file system, HTTP, in-memory fixtures).

Contract
--------
- ``load()``  — coroutine returning the current text, or raising a
  ``SourceError`` subclass.  Must be safe to retry: apart from the Http
  client cache, a failed load leaves no trace.
- ``aclose()`` — release transient resources (no-op by default).

Concrete sources are pydantic models carrying a ``type`` discriminator so
that a Logfile's ``source`` field round-trips through YAML.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class DataSource(BaseModel, ABC):
    """Abstract base for all data sources."""

    @abstractmethod
    async def load(self) -> str:
        """Return the current text of the source."""

    async def aclose(self) -> None:
        """Release transient resources held by the source."""
