"""Tests for the media proxy allow-list."""

import pytest

from tokview.errors import InvalidProxyTarget
from tokview.proxy import ALLOWED_MEDIA_DOMAINS, guard_media_url, is_allowed_media_host, proxied_url


@pytest.mark.parametrize("domain", ALLOWED_MEDIA_DOMAINS)
def test_each_allowed_domain(domain: str) -> None:
    assert is_allowed_media_host(f"https://p16-sign.{domain}/obj/abc.jpeg?x-expires=1")


@pytest.mark.parametrize("url", [
    "https://example.com/video.mp4",
    "https://tiktok.com.evil.example/a.jpg",
    "",
])
def test_unrelated_hosts_denied(url: str) -> None:
    assert not is_allowed_media_host(url)


def test_substring_match_is_loose() -> None:
    # Known weakness: the allow-listed text only has to appear somewhere.
    assert is_allowed_media_host("https://nottiktokcdn.com.attacker.example/x")
    assert is_allowed_media_host("https://attacker.example/?u=tiktokcdn.com")


def test_guard_decodes_and_accepts() -> None:
    url = "https://v16.tiktokcdn.com/v.mp4?a=1&b=2"
    assert guard_media_url(proxied_url(url).split("url=", 1)[1]) == url


@pytest.mark.parametrize("raw", ["", "ftp://v16.tiktokcdn.com/x", "https://example.com/x.mp4", "javascript:tiktokcdn.com"])
def test_guard_rejects(raw: str) -> None:
    with pytest.raises(InvalidProxyTarget):
        guard_media_url(raw)


def test_proxied_url() -> None:
    assert proxied_url("") == ""
    assert proxied_url("https://a.tiktokcdn.com/x?y=1") == "/proxy?url=https%3A%2F%2Fa.tiktokcdn.com%2Fx%3Fy%3D1"
