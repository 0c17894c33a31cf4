"""Resource classifier — turns search-box text into a canonical route.

Accepted inputs:
  @handle                         → user
  #tag                            → tag
  1234567890                      → video
  https://www.tiktok.com/@h       → user
  https://www.tiktok.com/@h/video/123 → video
  https://www.tiktok.com/video/123    → video
  https://vm.tiktok.com/ZMabc/    → short link (resolved later by fetching it)
  https://www.tiktok.com/tag/cats → tag
  anything else                   → user, treated as a handle without "@"
"""

from __future__ import annotations

import logging
from urllib.parse import unquote

from .routes import CanonicalRoute, ShortLinkRoute, TagRoute, UserRoute, VideoRoute

logger = logging.getLogger(__name__)

PLATFORM_DOMAIN = "tiktok.com"
SHORT_LINK_HOSTS = ("vm.tiktok.com", "vt.tiktok.com")

_USER_MARKER = "/@"
_VIDEO_MARKER = "/video/"
_SHORT_PATH_MARKER = "/t/"
_TAG_MARKERS = ("/tag/", "/discover/")


def _cut(text: str, *stops: str) -> str:
    """Return text up to the first occurrence of any stop character."""
    end = len(text)
    for stop in stops:
        pos = text.find(stop)
        if pos != -1:
            end = min(end, pos)
    return text[:end]


def classify_url(url: str) -> CanonicalRoute | None:
    """Classify a platform URL. Returns None for URL shapes we don't know.

    Order matters: ``/@user/video/123`` must become a video before the
    plain ``/video/`` check gets a chance to run.
    """
    if _USER_MARKER in url:
        path = _cut(url[url.find(_USER_MARKER):], "?", "#")
        if _VIDEO_MARKER in path:
            video_id = _cut(path[path.find(_VIDEO_MARKER) + len(_VIDEO_MARKER):], "/")
            return VideoRoute(video_id) if video_id else None
        handle = _cut(path[len(_USER_MARKER):], "/")
        return UserRoute(handle) if handle else None

    if _VIDEO_MARKER in url:
        video_id = _cut(url[url.find(_VIDEO_MARKER) + len(_VIDEO_MARKER):], "?", "/", "#")
        return VideoRoute(video_id) if video_id else None

    if any(host in url for host in SHORT_LINK_HOSTS) or _SHORT_PATH_MARKER in url:
        return ShortLinkRoute(unquote(url))

    for marker in _TAG_MARKERS:
        if marker in url:
            tag = _cut(url[url.find(marker) + len(marker):], "?", "#").strip("/")
            tag = unquote(tag).lstrip("#")
            return TagRoute(tag) if tag else None

    return None


def classify(text: str) -> CanonicalRoute | None:
    """Classify free-form input. Returns None only for empty input."""
    text = (text or "").strip()
    if not text:
        return None

    if text.startswith("@"):
        handle = text[1:]
        return UserRoute(handle) if handle else None

    if text.startswith("#"):
        tag = text[1:]
        return TagRoute(tag) if tag else None

    if PLATFORM_DOMAIN in text:
        route = classify_url(text)
        if route is not None:
            return route
        logger.debug("Unrecognized platform URL, treating as handle: %s", text)
        return UserRoute(text)

    if text.isascii() and text.isdigit():
        return VideoRoute(text)

    return UserRoute(text)
