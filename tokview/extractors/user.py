"""User profile resolver.

Two shapes are known:
  - __DEFAULT_SCOPE__ → "webapp.user-detail" → userInfo {user, stats}
  - UserModule → users[handle] + stats[handle]  (legacy SIGI_STATE)
"""

from __future__ import annotations

from typing import Any

from ..schemas import UserInfo
from .base import Resolver, get_count, get_str, obj

DEFAULT_SCOPE = "__DEFAULT_SCOPE__"
USER_DETAIL = "webapp.user-detail"


def _lookup_handle(mapping: dict[str, Any] | None, handle: str) -> dict[str, Any] | None:
    """Entry for ``handle``; handles are case-insensitive upstream."""
    if not mapping:
        return None
    if handle in mapping:
        return obj(mapping, handle)
    folded = handle.casefold()
    for name in mapping:
        if name.casefold() == folded:
            return obj(mapping, name)
    return None


def _build_user(user: dict[str, Any], stats: dict[str, Any] | None, handle: str) -> UserInfo:
    return UserInfo(
        id=get_str(user, "id"),
        username=get_str(user, "uniqueId") or handle,
        nickname=get_str(user, "nickname"),
        bio=get_str(user, "signature"),
        avatar_url=get_str(user, "avatarLarger", "avatarMedium"),
        follower_count=get_count(stats, "followerCount"),
        following_count=get_count(stats, "followingCount"),
        like_count=get_count(stats, "heartCount", "heart"),
        video_count=get_count(stats, "videoCount"),
    )


class ScopedUserDetail:
    name = "default-scope user-detail"

    def resolve(self, doc: dict[str, Any], key: str) -> UserInfo | None:
        user_info = obj(doc, DEFAULT_SCOPE, USER_DETAIL, "userInfo")
        user = obj(user_info, "user")
        if user is None:
            return None
        return _build_user(user, obj(user_info, "stats"), key)


class LegacyUserModule:
    name = "legacy UserModule"

    def resolve(self, doc: dict[str, Any], key: str) -> UserInfo | None:
        module = obj(doc, "UserModule")
        user = _lookup_handle(obj(module, "users"), key)
        stats = _lookup_handle(obj(module, "stats"), key)
        if user is None or stats is None:
            return None
        return _build_user(user, stats, key)


resolve_user = Resolver[UserInfo]("user", [ScopedUserDetail(), LegacyUserModule()])
