"""File data source and the reverse tail reader.

``TailReader`` returns the last ``line_limit`` lines of a seekable byte
stream without reading the whole stream: it steps backwards from the end in
``chunk_size`` increments, counting newlines, until it has seen more than
``line_limit`` of them or reached the start, then trims the surplus lines
from the front.  The result does not depend on ``chunk_size``; only the
amount of I/O does.

Each chunk is decoded on its own.  A chunk boundary that falls inside a
multi-byte UTF-8 character raises ``SourceDecodeError``.
"""

from __future__ import annotations

import asyncio
import io
from pathlib import Path
from typing import BinaryIO, Literal

from pydantic import Field

from minutecat.exceptions import SourceDecodeError, SourceReadError
from minutecat.logging import get_logger
from minutecat.sources.base import DataSource

log = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64


class TailReader:
    """Reads the bottom ``line_limit`` lines of *stream* backwards.

    Usage::

        with open(path, "rb") as f:
            text = TailReader(f, line_limit=100).read_lines()
    """

    def __init__(
        self,
        stream: BinaryIO,
        line_limit: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if line_limit < 0:
            raise ValueError(f"line_limit must not be negative, got {line_limit}")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._stream = stream
        self.line_limit = line_limit
        self.chunk_size = chunk_size

    def _read_chunk(self, size: int) -> str:
        raw = self._stream.read(size)
        if len(raw) != size:
            raise SourceReadError(
                getattr(self._stream, "name", "<stream>"),
                f"short read: expected {size} bytes, got {len(raw)}",
            )
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceDecodeError(str(exc)) from exc

    def read_lines(self) -> str:
        seek_pos = self._stream.seek(0, io.SEEK_END)

        lines = 0
        chunks: list[str] = []

        # Walk backwards until position 0 or more than line_limit newlines.
        while seek_pos > 0 and lines <= self.line_limit:
            if seek_pos < self.chunk_size:
                size = seek_pos
                seek_pos = 0
            else:
                seek_pos -= self.chunk_size
                size = self.chunk_size

            self._stream.seek(seek_pos)
            chunk = self._read_chunk(size)
            lines += chunk.count("\n")
            chunks.append(chunk)

        text = "".join(reversed(chunks))

        start = 0
        remaining = text.count("\n")
        while remaining >= self.line_limit:
            pos = text.find("\n", start)
            if pos == -1:
                break
            start = pos + 1
            remaining -= 1

        return text[start:]


class FileDataSource(DataSource):
    """Loads the last ``line_limit`` lines of a local file."""

    type: Literal["File"] = "File"
    path: str
    line_limit: int = Field(default=100, ge=0)

    def _read_tail(self) -> str:
        path = Path(self.path).expanduser()
        try:
            with path.open("rb") as f:
                return TailReader(f, self.line_limit).read_lines()
        except OSError as exc:
            raise SourceReadError(self.path, exc.strerror or str(exc)) from exc

    async def load(self) -> str:
        text = await asyncio.to_thread(self._read_tail)
        log.debug("file_source_loaded", path=self.path, chars=len(text))
        return text
