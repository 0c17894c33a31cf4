"""Tokview renderer — plain-text cards for entities (CLI output).

Card layout:
  ═══ USER ═══════════════════════════════════════
  Display Name (@handle)
  /@handle
  Followers: 1.2M | Following: 210 | Likes: 45.1M | Videos: 312

  ─── BIO ──────────────────────────────────────────
  ...

Media links are shown as same-origin /proxy paths, never upstream URLs.
"""

from __future__ import annotations

from datetime import datetime, timezone

from .schemas import Lookup, TagInfo, UserInfo, VideoInfo

_WIDTH = 50


def _rule(title: str, char: str = "─") -> str:
    head = f"{char * 3} {title} "
    return head + char * max(1, _WIDTH - len(head))


def compact_count(n: int) -> str:
    """1234 → '1.2K', 5_600_000 → '5.6M'."""
    for threshold, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if n >= threshold:
            value = f"{n / threshold:.1f}".rstrip("0").rstrip(".")
            return f"{value}{suffix}"
    return str(n)


def format_date(create_time: int) -> str:
    if create_time <= 0:
        return ""
    try:
        return datetime.fromtimestamp(create_time, tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return ""


def _truncate_line(text: str, max_len: int = 120) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len].rsplit(" ", 1)[0].rstrip(".,;:!?") + "..."


def render_video(video: VideoInfo) -> str:
    lines = [_rule("VIDEO", "═")]
    author = video.author_nickname or video.author_username
    if video.author_username and video.author_nickname:
        author = f"{video.author_nickname} (@{video.author_username})"
    lines.append(author or "Unknown author")
    lines.append(f"/video/{video.id}")

    meta = (
        f"Views: {compact_count(video.view_count)} | Likes: {compact_count(video.like_count)}"
        f" | Comments: {compact_count(video.comment_count)} | Shares: {compact_count(video.share_count)}"
    )
    posted = format_date(video.create_time)
    if posted:
        meta += f" | Posted: {posted}"
    lines.append(meta)

    if video.description:
        lines.append("")
        lines.append(_rule("DESCRIPTION"))
        lines.append(video.description)

    if video.music_title:
        lines.append("")
        music = video.music_title
        if video.music_author:
            music += f" · {video.music_author}"
        lines.append(f"♪ {_truncate_line(music)}")

    media = [
        ("video", video.proxied_video_url()),
        ("thumbnail", video.proxied_thumbnail_url()),
    ]
    media = [(label, url) for label, url in media if url]
    if media:
        lines.append("")
        lines.append(_rule("MEDIA"))
        for label, url in media:
            lines.append(f"→ {label}: {url}")

    return "\n".join(lines)


def render_user(user: UserInfo) -> str:
    lines = [_rule("USER", "═")]
    name = f"{user.nickname} (@{user.username})" if user.nickname else f"@{user.username}"
    lines.append(name)
    lines.append(f"/@{user.username}")
    lines.append(
        f"Followers: {compact_count(user.follower_count)}"
        f" | Following: {compact_count(user.following_count)}"
        f" | Likes: {compact_count(user.like_count)}"
        f" | Videos: {compact_count(user.video_count)}"
    )

    if user.bio:
        lines.append("")
        lines.append(_rule("BIO"))
        lines.append(user.bio)

    avatar = user.proxied_avatar_url()
    if avatar:
        lines.append("")
        lines.append(f"→ avatar: {avatar}")

    if user.videos:
        lines.append("")
        lines.append(_rule("VIDEOS"))
        for v in user.videos[:12]:
            lines.append(f"▸ /video/{v.id} {_truncate_line(v.description, 80)}")

    return "\n".join(lines)


def render_tag(tag: TagInfo) -> str:
    lines = [_rule("TAG", "═")]
    lines.append(f"#{tag.name}")
    lines.append(f"/tag/{tag.name}")
    lines.append(f"Views: {compact_count(tag.view_count)}")

    if tag.videos:
        lines.append("")
        lines.append(_rule("VIDEOS"))
        for v in tag.videos[:12]:
            lines.append(f"▸ /video/{v.id} {_truncate_line(v.description, 80)}")

    return "\n".join(lines)


def render_lookup(lookup: Lookup) -> str:
    entity = lookup.entity
    if isinstance(entity, UserInfo):
        body = render_user(entity)
    elif isinstance(entity, VideoInfo):
        body = render_video(entity)
    else:
        body = render_tag(entity)

    if lookup.degraded:
        body += f"\n\n! {lookup.note}"
    return body
