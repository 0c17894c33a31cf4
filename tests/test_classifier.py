"""Tests for turning search text and pasted URLs into routes."""

import pytest

from tokview.classifier import classify, classify_url
from tokview.routes import ShortLinkRoute, TagRoute, UserRoute, VideoRoute


@pytest.mark.parametrize("handle", ["someone", "some.one_99", "Zed"])
def test_handle_with_or_without_at(handle: str) -> None:
    assert classify("@" + handle) == UserRoute(handle)
    assert classify(handle) == UserRoute(handle)
    assert classify(f"  @{handle}  ") == UserRoute(handle)


@pytest.mark.parametrize("digits", ["0", "7301234567890123456"])
def test_digits_are_video_ids(digits: str) -> None:
    assert classify(digits) == VideoRoute(digits)


def test_non_ascii_digits_are_not_video_ids() -> None:
    assert classify("١٢٣") == UserRoute("١٢٣")


def test_hashtag() -> None:
    assert classify("#cats") == TagRoute("cats")


def test_empty_input() -> None:
    assert classify("") is None
    assert classify("   ") is None
    assert classify("@") is None
    assert classify("#") is None


def test_user_url() -> None:
    assert classify("https://www.tiktok.com/@someone?lang=en") == UserRoute("someone")
    assert classify("https://www.tiktok.com/@someone/") == UserRoute("someone")


def test_video_under_user_path_is_a_video() -> None:
    url = "https://www.tiktok.com/@someone/video/7301234567890123456?is_from_webapp=1"
    assert classify(url) == VideoRoute("7301234567890123456")


def test_direct_video_url() -> None:
    assert classify_url("https://m.tiktok.com/video/123456/?x=1") == VideoRoute("123456")
    assert classify_url("https://www.tiktok.com/video/123456?x=1") == VideoRoute("123456")


def test_short_links_are_forwarded_decoded() -> None:
    assert classify("https://vm.tiktok.com/ZMabc123/") == ShortLinkRoute("https://vm.tiktok.com/ZMabc123/")
    assert classify_url("https://www.tiktok.com/t/ZT8abc%2F") == ShortLinkRoute("https://www.tiktok.com/t/ZT8abc/")


@pytest.mark.parametrize("tag", ["cats", "funny_dogs", "2024"])
def test_tag_url_drops_query(tag: str) -> None:
    assert classify(f"https://www.tiktok.com/tag/{tag}?x=y") == TagRoute(tag)


def test_discover_url() -> None:
    assert classify_url("https://www.tiktok.com/discover/cooking?lang=en") == TagRoute("cooking")


def test_unrecognized_platform_url_becomes_handle() -> None:
    url = "https://www.tiktok.com/foryou"
    assert classify_url(url) is None
    assert classify(url) == UserRoute(url)


def test_route_paths() -> None:
    assert UserRoute("someone").path == "/@someone"
    assert VideoRoute("42").path == "/video/42"
    assert TagRoute("cats").path == "/tag/cats"
    assert ShortLinkRoute("https://vm.tiktok.com/Z/").path == "/redirect?url=https%3A%2F%2Fvm.tiktok.com%2FZ%2F"


def test_route_paths_escape_reserved_characters() -> None:
    assert classify("a#b").path == "/@a%23b"
    assert VideoRoute("1/2").path == "/video/1%2F2"
    assert TagRoute("a?b").path == "/tag/a%3Fb"
    assert classify("https://www.tiktok.com/foryou").path == "/@https%3A%2F%2Fwww.tiktok.com%2Fforyou"
