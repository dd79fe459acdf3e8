"""HTTP data source.

Issues a GET against ``url`` and returns the response body as text.  One
``httpx.AsyncClient`` is created lazily on the first load and reused for
every later call; ``aclose()`` releases it.

The URL is checked when the source is built.  Every request carries an
explicit timeout.  At load time any timeout, transport failure, unusable
URL or non-2xx status raises an ``HttpFetchError`` subclass, which the log
set treats as a per-source failure.  Cancelling the awaiting task cancels
the in-flight request.
"""

from __future__ import annotations

from typing import Literal

import httpx
from pydantic import Field, PrivateAttr, field_validator

from minutecat.exceptions import HttpFetchError, HttpTimeoutError
from minutecat.logging import get_logger
from minutecat.sources.base import DataSource

log = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpDataSource(DataSource):
    type: Literal["Http"] = "Http"
    url: str
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    _client: httpx.AsyncClient | None = PrivateAttr(default=None)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid URL: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("URL must be absolute http or https")
        return value

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                follow_redirects=True,
            )
        return self._client

    async def load(self) -> str:
        client = self._get_client()
        try:
            response = await client.get(self.url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise HttpTimeoutError(self.url, self.timeout_seconds) from exc
        except httpx.HTTPStatusError as exc:
            raise HttpFetchError(
                self.url,
                f"HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise HttpFetchError(self.url, str(exc) or exc.__class__.__name__) from exc
        except httpx.InvalidURL as exc:
            raise HttpFetchError(self.url, f"invalid URL: {exc}") from exc

        log.debug("http_source_loaded", url=self.url, status_code=response.status_code)
        return response.text

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
