"""Shared helpers: fake upstream pages and a client wired to a mock transport."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from tokview.client import UpstreamClient

BASE = "https://www.tiktok.com"


def state_page(doc: Any, script_id: str = "__UNIVERSAL_DATA_FOR_REHYDRATION__") -> str:
    return (
        "<!DOCTYPE html><html><head><title>TikTok</title>"
        '<script src="/app.js"></script>'
        f'<script id="{script_id}" type="application/json">{json.dumps(doc)}</script>'
        "</head><body><div id=app></div></body></html>"
    )


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> UpstreamClient:
    return UpstreamClient(
        BASE,
        user_agent="tokview-tests",
        timeout=5,
        max_redirects=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def pages():
    """Map of URL → (status, html); unknown URLs 404."""
    return {}


@pytest.fixture
def client(pages):
    def handler(request: httpx.Request) -> httpx.Response:
        status, body = pages.get(str(request.url), (404, "not here"))
        return httpx.Response(status, text=body, headers={"content-type": "text/html"})

    with make_client(handler) as c:
        yield c
