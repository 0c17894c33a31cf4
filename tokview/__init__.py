"""
tokview — a privacy front-end for TikTok pages.

Usage:
    from tokview import classify, extract_state, resolve_video, fallback

    route = classify("https://www.tiktok.com/@someone/video/123")
    # → VideoRoute(id='123')

    doc = extract_state(html)            # dict or None
    video = resolve_video(doc, "123") if doc else None
    if video is None:
        video = fallback("video", "123")

    # Or let the service do fetch → extract → resolve → fallback:
    from tokview import UpstreamClient, lookup_video
    with UpstreamClient() as client:
        lookup = lookup_video(client, "123")
"""

from .classifier import classify, classify_url
from .client import UpstreamClient
from .errors import FetchFailure, InvalidProxyTarget, NotFound, TokviewError
from .extractors import extract_state, resolve, resolve_tag, resolve_user, resolve_video
from .fallback import fallback
from .proxy import guard_media_url, is_allowed_media_host
from .routes import CanonicalRoute, ShortLinkRoute, TagRoute, UserRoute, VideoRoute
from .schemas import Lookup, TagInfo, UserInfo, VideoInfo
from .service import (
    lookup_route,
    lookup_tag,
    lookup_user,
    lookup_video,
    resolve_route,
    resolve_short_link,
)

__all__ = [
    "CanonicalRoute",
    "FetchFailure",
    "InvalidProxyTarget",
    "Lookup",
    "NotFound",
    "ShortLinkRoute",
    "TagInfo",
    "TagRoute",
    "TokviewError",
    "UpstreamClient",
    "UserInfo",
    "UserRoute",
    "VideoInfo",
    "VideoRoute",
    "classify",
    "classify_url",
    "extract_state",
    "fallback",
    "guard_media_url",
    "is_allowed_media_host",
    "lookup_route",
    "lookup_tag",
    "lookup_user",
    "lookup_video",
    "resolve",
    "resolve_route",
    "resolve_short_link",
    "resolve_tag",
    "resolve_user",
    "resolve_video",
]
