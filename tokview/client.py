"""Upstream client — the only place that talks to the network.

Construct one and pass it in; nothing here is a module-level singleton.
Tests hand in an ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator
from urllib.parse import quote

import httpx

from . import config
from .errors import FetchFailure, NotFound

logger = logging.getLogger(__name__)

_PAGE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",  # no zstd, no br
}

_STREAM_CHUNK = 64 * 1024


@dataclass(slots=True)
class Fetched:
    status: int
    content: bytes
    url: str
    content_type: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@dataclass(slots=True)
class MediaStream:
    content_type: str
    response: httpx.Response

    def chunks(self) -> Iterator[bytes]:
        """Yield the body, closing the response once it is used up."""
        try:
            yield from self.response.iter_bytes(_STREAM_CHUNK)
        finally:
            self.response.close()

    def close(self) -> None:
        self.response.close()


class UpstreamClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        user_agent: str | None = None,
        timeout: float | None = None,
        max_redirects: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or config.get("TOKVIEW_UPSTREAM_BASE")).rstrip("/")
        self._http = httpx.Client(
            headers={"User-Agent": user_agent or config.get("TOKVIEW_USER_AGENT")},
            timeout=timeout if timeout is not None else config.get_int("TOKVIEW_TIMEOUT"),
            follow_redirects=True,
            max_redirects=max_redirects if max_redirects is not None else config.get_int("TOKVIEW_MAX_REDIRECTS"),
            transport=transport,
        )

    # ── Page URLs ────────────────────────────────────────────────

    def user_url(self, handle: str) -> str:
        return f"{self.base_url}/@{quote(handle, safe='')}"

    def video_url(self, video_id: str) -> str:
        return f"{self.base_url}/video/{quote(video_id, safe='')}"

    def tag_url(self, name: str) -> str:
        return f"{self.base_url}/tag/{quote(name, safe='')}"

    # ── Transport ────────────────────────────────────────────────

    def fetch(self, url: str) -> Fetched:
        """GET ``url`` following redirects. Raises FetchFailure on network errors."""
        try:
            resp = self._http.get(url, headers=_PAGE_HEADERS)
        except httpx.HTTPError as exc:
            raise FetchFailure(f"{type(exc).__name__}: {exc}") from exc
        return Fetched(
            status=resp.status_code,
            content=resp.content,
            url=str(resp.url),
            content_type=resp.headers.get("content-type", ""),
        )

    def fetch_page(self, url: str) -> str:
        """Fetch an HTML page; 404 → NotFound, other non-2xx → FetchFailure."""
        logger.info("Fetching %s", url)
        fetched = self.fetch(url)
        if fetched.status == 404:
            raise NotFound(url)
        if not fetched.ok:
            raise FetchFailure(f"Status: {fetched.status}")
        return fetched.text

    def stream(self, url: str) -> MediaStream:
        """Open ``url`` for passthrough without buffering the body.

        The caller owns the returned stream and must ``close()`` it, even
        if the body is never read.
        """
        request = self._http.build_request("GET", url)
        try:
            resp = self._http.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise FetchFailure(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            status = resp.status_code
            resp.close()
            raise NotFound(f"media status {status}")

        return MediaStream(
            content_type=resp.headers.get("content-type", "application/octet-stream"),
            response=resp,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> UpstreamClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
