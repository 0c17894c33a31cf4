"""Canonical routes — what the user meant, independent of how they typed it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class UserRoute:
    handle: str  # without the leading "@"

    @property
    def path(self) -> str:
        return f"/@{quote(self.handle, safe='')}"


@dataclass(frozen=True, slots=True)
class VideoRoute:
    id: str

    @property
    def path(self) -> str:
        return f"/video/{quote(self.id, safe='')}"


@dataclass(frozen=True, slots=True)
class TagRoute:
    name: str

    @property
    def path(self) -> str:
        return f"/tag/{quote(self.name, safe='')}"


@dataclass(frozen=True, slots=True)
class ShortLinkRoute:
    """A short link whose target is only known after following it."""

    url: str

    @property
    def path(self) -> str:
        return f"/redirect?url={quote(self.url, safe='')}"


CanonicalRoute = Union[UserRoute, VideoRoute, TagRoute, ShortLinkRoute]
