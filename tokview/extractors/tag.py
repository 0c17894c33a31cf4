"""Tag (hashtag/challenge) resolver."""

from __future__ import annotations

from typing import Any

from ..schemas import TagInfo
from .base import Resolver, get_count, get_str, obj

DEFAULT_SCOPE = "__DEFAULT_SCOPE__"
CHALLENGE_DETAIL = "webapp.challenge-detail"


def _build_tag(challenge_info: dict[str, Any] | None, key: str) -> TagInfo | None:
    challenge = obj(challenge_info, "challenge")
    if challenge is None:
        return None
    stats = obj(challenge_info, "stats") or obj(challenge_info, "statsV2")
    return TagInfo(
        name=(get_str(challenge, "title") or key).lstrip("#"),
        view_count=get_count(stats, "viewCount"),
    )


class ScopedChallengeDetail:
    name = "default-scope challenge-detail"

    def resolve(self, doc: dict[str, Any], key: str) -> TagInfo | None:
        return _build_tag(obj(doc, DEFAULT_SCOPE, CHALLENGE_DETAIL, "challengeInfo"), key)


class LegacyChallengePage:
    name = "legacy ChallengePage"

    def resolve(self, doc: dict[str, Any], key: str) -> TagInfo | None:
        return _build_tag(obj(doc, "ChallengePage", "challengeInfo"), key)


resolve_tag = Resolver[TagInfo]("tag", [ScopedChallengeDetail(), LegacyChallengePage()])
