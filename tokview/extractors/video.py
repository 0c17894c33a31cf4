"""Video resolver.

Known shapes:
  - __DEFAULT_SCOPE__ → "webapp.video-detail" → itemInfo → itemStruct
  - ItemModule[video_id]  (legacy; a single-item module may be keyed
    by something other than the id we asked for)
"""

from __future__ import annotations

from typing import Any

from ..schemas import VideoInfo
from .base import Resolver, get_count, get_int, get_opt_str, get_str, obj

DEFAULT_SCOPE = "__DEFAULT_SCOPE__"
VIDEO_DETAIL = "webapp.video-detail"


def resolve_video_item(item: dict[str, Any], key: str = "") -> VideoInfo:
    """Map one item object to a VideoInfo.

    ``author`` is an object in current payloads and a bare handle string
    in legacy ItemModule entries (with nickname/avatarThumb on the item).
    """
    author = item.get("author")
    if isinstance(author, str):
        author_username = author
        author_nickname = get_str(item, "nickname")
        author_avatar = get_str(item, "avatarThumb")
    else:
        author = obj(item, "author")
        author_username = get_str(author, "uniqueId")
        author_nickname = get_str(author, "nickname")
        author_avatar = get_str(author, "avatarMedium", "avatarThumb")

    stats = obj(item, "stats") or obj(item, "statsV2")
    video = obj(item, "video")
    music = obj(item, "music")

    return VideoInfo(
        id=get_str(item, "id") or key,
        description=get_str(item, "desc"),
        author_username=author_username,
        author_nickname=author_nickname,
        author_avatar=author_avatar,
        video_url=get_str(video, "playAddr", "downloadAddr"),
        thumbnail_url=get_str(video, "cover", "originCover", "dynamicCover"),
        like_count=get_count(stats, "diggCount"),
        comment_count=get_count(stats, "commentCount"),
        share_count=get_count(stats, "shareCount"),
        view_count=get_count(stats, "playCount"),
        create_time=get_int(item, "createTime"),
        music_title=get_opt_str(music, "title"),
        music_author=get_opt_str(music, "authorName"),
    )


class ScopedVideoDetail:
    name = "default-scope video-detail"

    def resolve(self, doc: dict[str, Any], key: str) -> VideoInfo | None:
        item = obj(doc, DEFAULT_SCOPE, VIDEO_DETAIL, "itemInfo", "itemStruct")
        if item is None:
            return None
        return resolve_video_item(item, key)


class LegacyItemModule:
    name = "legacy ItemModule"

    def resolve(self, doc: dict[str, Any], key: str) -> VideoInfo | None:
        module = obj(doc, "ItemModule")
        if not module:
            return None
        item = obj(module, key)
        if item is None and len(module) == 1:
            item = obj(module, next(iter(module)))
        if item is None:
            return None
        return resolve_video_item(item, key)


resolve_video = Resolver[VideoInfo]("video", [ScopedVideoDetail(), LegacyItemModule()])
