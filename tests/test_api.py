"""Tests for the HTTP surface, with the upstream client swapped for a fake."""

import httpx
import pytest
from fastapi.testclient import TestClient

from tokview.api import app, get_client, proxy_media

from conftest import BASE, make_client, state_page

VIDEO_DOC = {"__DEFAULT_SCOPE__": {"webapp.video-detail": {"itemInfo": {"itemStruct": {
    "id": "777",
    "desc": "hello",
    "author": {"uniqueId": "someone", "avatarMedium": "https://p16.tiktokcdn.com/a.jpg"},
    "video": {"playAddr": "https://v16.tiktokcdn.com/v.mp4", "cover": "https://p16.tiktokcdn.com/c.jpg"},
}}}}}


def _handler(request: httpx.Request) -> httpx.Response:
    url = str(request.url)
    if url == f"{BASE}/video/777":
        return httpx.Response(200, text=state_page(VIDEO_DOC))
    if url == f"{BASE}/video/888":
        return httpx.Response(200, text="<html>no state</html>")
    if url == f"{BASE}/video/500":
        return httpx.Response(500, text="oops")
    if url == f"{BASE}/tag/cats":
        return httpx.Response(200, text="<html></html>")
    if request.url.host == "v16.tiktokcdn.com":
        return httpx.Response(200, content=b"\x00\x01mp4bytes", headers={"content-type": "video/mp4"})
    if request.url.host == "vm.tiktok.com":
        return httpx.Response(302, headers={"location": f"{BASE}/tag/cats"})
    return httpx.Response(404)


@pytest.fixture
def api():
    upstream = make_client(_handler)
    app.dependency_overrides[get_client] = lambda: upstream
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        upstream.close()


def test_health_and_security_headers(api) -> None:
    resp = api.get("/health")
    assert resp.json() == {"status": "ok"}
    assert "default-src 'self'" in resp.headers["content-security-policy"]
    assert resp.headers["referrer-policy"] == "no-referrer"
    assert resp.headers["x-frame-options"] == "DENY"


@pytest.mark.parametrize("q,location", [
    ("@someone", "/@someone"),
    ("someone", "/@someone"),
    ("#cats", "/tag/cats"),
    ("12345", "/video/12345"),
    ("https://www.tiktok.com/@a/video/9?x=1", "/video/9"),
    ("https://vm.tiktok.com/Z/", "/redirect?url=https%3A%2F%2Fvm.tiktok.com%2FZ%2F"),
])
def test_search_redirects(api, q: str, location: str) -> None:
    resp = api.get("/", params={"q": q}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == location


def test_home_without_query(api) -> None:
    resp = api.get("/")
    assert resp.status_code == 200
    assert "hint" in resp.json()


def test_short_link_redirect(api) -> None:
    resp = api.get("/redirect", params={"url": "https://vm.tiktok.com/Z/"}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/tag/cats"


def test_video_page_rewrites_media_through_proxy(api) -> None:
    resp = api.get("/video/777")
    assert resp.status_code == 200
    body = resp.json()
    assert body["degraded"] is False
    video = body["entity"]
    assert video["description"] == "hello"
    assert video["video_url"].startswith("/proxy?url=https%3A%2F%2Fv16.tiktokcdn.com")
    assert video["thumbnail_url"].startswith("/proxy?url=")
    assert video["author_avatar"].startswith("/proxy?url=")


def test_video_page_degraded(api) -> None:
    body = api.get("/video/888").json()
    assert body["degraded"] is True
    assert body["entity"]["id"] == "888"
    assert body["entity"]["video_url"] == ""


def test_error_statuses(api) -> None:
    assert api.get("/video/404404").status_code == 404
    resp = api.get("/video/500")
    assert resp.status_code == 502
    assert resp.json() == {"error": "Failed to fetch from TikTok"}


def test_proxy_streams_allowed_media(api) -> None:
    resp = api.get("/proxy", params={"url": "https://v16.tiktokcdn.com/v.mp4"})
    assert resp.status_code == 200
    assert resp.content == b"\x00\x01mp4bytes"
    assert resp.headers["content-type"] == "video/mp4"
    assert resp.headers["cache-control"] == "public, max-age=86400"


def test_proxy_rejects_other_hosts(api) -> None:
    resp = api.get("/proxy", params={"url": "https://example.com/x.mp4"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid URL format"}


def test_proxy_upstream_missing_media(api) -> None:
    resp = api.get("/proxy", params={"url": "https://p16.tiktokcdn.com/gone.jpg"})
    assert resp.status_code == 404


def test_unrecognized_platform_url_ends_in_not_found(api) -> None:
    resp = api.get("/", params={"q": "https://www.tiktok.com/foryou"}, follow_redirects=False)
    assert resp.status_code == 303
    location = resp.headers["location"]
    assert location == "/@https%3A%2F%2Fwww.tiktok.com%2Fforyou"

    resp = api.get(location)
    assert resp.status_code == 404
    assert resp.json() == {"error": "TikTok content not found"}


def test_handle_with_reserved_characters_is_escaped_upstream() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path)
        return httpx.Response(404)

    upstream = make_client(handler)
    app.dependency_overrides[get_client] = lambda: upstream
    try:
        resp = TestClient(app).get("/@a%23b")
    finally:
        app.dependency_overrides.clear()
        upstream.close()
    assert resp.status_code == 404
    assert seen == [b"/@a%23b"]


def test_proxy_response_closes_upstream_in_background() -> None:
    upstream = make_client(_handler)
    try:
        response = proxy_media(url="https://v16.tiktokcdn.com/v.mp4", client=upstream)
        assert response.background is not None
        media = response.background.func.__self__
        assert not media.response.is_closed
        response.background.func()
        assert media.response.is_closed
    finally:
        upstream.close()
