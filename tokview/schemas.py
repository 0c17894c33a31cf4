"""Normalized entity models — what the rest of the app renders.

String fields default to "" and counters to 0 so renderers never have
to check for missing data.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .proxy import proxied_url

EntityKind = Literal["user", "video", "tag"]


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class VideoInfo(_Entity):
    id: str = ""
    description: str = ""
    author_username: str = ""
    author_nickname: str = ""
    author_avatar: str = ""
    video_url: str = ""
    thumbnail_url: str = ""
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    share_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    create_time: int = 0  # epoch seconds, 0 if unknown
    music_title: Optional[str] = None
    music_author: Optional[str] = None

    def proxied_video_url(self) -> str:
        return proxied_url(self.video_url)

    def proxied_thumbnail_url(self) -> str:
        return proxied_url(self.thumbnail_url)

    def proxied_author_avatar(self) -> str:
        return proxied_url(self.author_avatar)


class UserInfo(_Entity):
    id: str = ""
    username: str = ""
    nickname: str = ""
    bio: str = ""
    avatar_url: str = ""
    follower_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    video_count: int = Field(default=0, ge=0)
    videos: tuple[VideoInfo, ...] = ()

    def proxied_avatar_url(self) -> str:
        return proxied_url(self.avatar_url)


class TagInfo(_Entity):
    name: str = ""  # without the leading '#'
    view_count: int = Field(default=0, ge=0)
    videos: tuple[VideoInfo, ...] = ()


Entity = Union[UserInfo, VideoInfo, TagInfo]


class Lookup(_Entity):
    """One page lookup: the entity plus whether it came from the fallback path."""

    kind: EntityKind
    key: str
    entity: Entity
    degraded: bool = False
    note: str = ""
