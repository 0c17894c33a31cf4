"""Fallback supplier — placeholder entities for pages we couldn't parse.

Reaching this is not an error. The upstream changes its page structure
often enough that a degraded page beats a failed one; only the requested
key is echoed back, everything else stays at its empty default.
"""

from __future__ import annotations

import logging

from .schemas import Entity, EntityKind, TagInfo, UserInfo, VideoInfo

logger = logging.getLogger(__name__)

_NOTES = {
    "user": "Profile information could not be loaded. TikTok may have changed their page structure.",
    "video": "Video information could not be loaded. TikTok may have changed their page structure.",
    "tag": "Tag information could not be loaded. TikTok may have changed their page structure.",
}


def fallback(kind: EntityKind, key: str) -> Entity:
    if kind == "user":
        return UserInfo(username=key)
    if kind == "video":
        return VideoInfo(id=key)
    if kind == "tag":
        return TagInfo(name=key)
    raise ValueError(f"unknown entity kind: {kind!r}")


def fallback_note(kind: EntityKind, key: str) -> str:
    """Diagnostic note to show alongside a placeholder entity."""
    logger.warning("Could not parse TikTok JSON, using fallback for %s: %s", kind, key)
    return _NOTES.get(kind, "Information could not be loaded.")
