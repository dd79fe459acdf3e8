"""minutecat — data sources.

Package structure
-----------------
sources/
  base.py        — DataSource ABC
  memory.py      — InMemoryDataSource (canned responses)
  filesystem.py  — FileDataSource + TailReader (reverse tail read)
  http.py        — HttpDataSource (httpx, lazily-created client)

``DataSourceTypes`` is the discriminated union used wherever a source is
persisted; its ``type`` field is one of ``InMemory``, ``File`` or ``Http``.
"""

from typing import Annotated, Union

from pydantic import Field

from minutecat.sources.base import DataSource
from minutecat.sources.filesystem import DEFAULT_CHUNK_SIZE, FileDataSource, TailReader
from minutecat.sources.http import HttpDataSource
from minutecat.sources.memory import InMemoryDataSource

DataSourceTypes = Annotated[
    Union[InMemoryDataSource, FileDataSource, HttpDataSource],
    Field(discriminator="type"),
]

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DataSource",
    "DataSourceTypes",
    "FileDataSource",
    "HttpDataSource",
    "InMemoryDataSource",
    "TailReader",
]
