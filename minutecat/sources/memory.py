"""In-memory data source — canned responses for tests and demos."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from minutecat.exceptions import InMemoryDataError
from minutecat.sources.base import DataSource


class InMemoryDataSource(DataSource):
    """Yields the last element of ``data`` on each load until exhausted.

    ``InMemoryDataSource(data=["second", "first"])`` loads "first", then
    "second", then raises ``InMemoryDataError``.
    """

    type: Literal["InMemory"] = "InMemory"
    data: list[str] = Field(default_factory=list)

    async def load(self) -> str:
        if not self.data:
            raise InMemoryDataError()
        return self.data.pop()
