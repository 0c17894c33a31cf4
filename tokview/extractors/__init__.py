"""Extractor registry — routes an entity kind to its schema resolver."""

from __future__ import annotations

from typing import Any

from ..schemas import Entity, EntityKind
from .state import extract_state
from .tag import resolve_tag
from .user import resolve_user
from .video import resolve_video, resolve_video_item

RESOLVERS = {
    "user": resolve_user,
    "video": resolve_video,
    "tag": resolve_tag,
}


def resolve(kind: EntityKind, doc: Any, key: str) -> Entity | None:
    """Resolve ``doc`` as the given kind. None if no known shape matches."""
    resolver = RESOLVERS.get(kind)
    if resolver is None:
        raise ValueError(f"unknown entity kind: {kind!r}")
    return resolver(doc, key)


__all__ = [
    "RESOLVERS",
    "extract_state",
    "resolve",
    "resolve_tag",
    "resolve_user",
    "resolve_video",
    "resolve_video_item",
]
