"""Tokview service — the entry point.

Handlers call lookup_user / lookup_video / lookup_tag with a client and
a key. Flow per lookup:
  1. Fetch the upstream page (NotFound / FetchFailure propagate)
  2. Pull the embedded state out of the HTML
  3. Run the kind's schema resolver over it
  4. If 2 or 3 came up empty, degrade to a placeholder entity
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from .classifier import PLATFORM_DOMAIN, classify_url
from .client import UpstreamClient
from .errors import InvalidProxyTarget, NotFound
from .extractors import extract_state, resolve
from .fallback import fallback, fallback_note
from .routes import CanonicalRoute, ShortLinkRoute, TagRoute, UserRoute, VideoRoute
from .schemas import EntityKind, Lookup

logger = logging.getLogger(__name__)


def parse_page(kind: EntityKind, html: str, key: str) -> Lookup:
    """Turn a fetched page into a Lookup, degrading instead of failing."""
    doc = extract_state(html)
    if doc is None:
        logger.info("No embedded state found for %s %s", kind, key)
    else:
        entity = resolve(kind, doc, key)
        if entity is not None:
            logger.info("Resolved %s %s", kind, key)
            return Lookup(kind=kind, key=key, entity=entity)
        logger.info("Embedded state matched no known %s schema for %s", kind, key)

    return Lookup(
        kind=kind,
        key=key,
        entity=fallback(kind, key),
        degraded=True,
        note=fallback_note(kind, key),
    )


def lookup_user(client: UpstreamClient, handle: str) -> Lookup:
    handle = handle.strip().lstrip("@")
    html = client.fetch_page(client.user_url(handle))
    return parse_page("user", html, handle)


def lookup_video(client: UpstreamClient, video_id: str) -> Lookup:
    video_id = video_id.strip()
    html = client.fetch_page(client.video_url(video_id))
    return parse_page("video", html, video_id)


def lookup_tag(client: UpstreamClient, name: str) -> Lookup:
    name = name.strip().lstrip("#")
    html = client.fetch_page(client.tag_url(name))
    return parse_page("tag", html, name)


def resolve_short_link(client: UpstreamClient, url: str) -> CanonicalRoute:
    """Follow a short link and classify where it lands.

    Raises InvalidProxyTarget for non-platform hosts (nothing is fetched),
    NotFound if the target is gone or isn't a page we understand.
    """
    host = (urlparse(url).hostname or "").lower()
    if host != PLATFORM_DOMAIN and not host.endswith("." + PLATFORM_DOMAIN):
        raise InvalidProxyTarget(f"short link host not allowed: {host!r}")
    logger.info("Resolving short link %s", url)
    fetched = client.fetch(url)
    if fetched.status == 404:
        raise NotFound(url)
    route = classify_url(fetched.url)
    if route is None or isinstance(route, ShortLinkRoute):
        logger.warning("Short link %s landed on unrecognized URL %s", url, fetched.url)
        raise NotFound(fetched.url)
    return route


def resolve_route(client: UpstreamClient, route: CanonicalRoute) -> CanonicalRoute:
    """Short links become concrete routes; everything else passes through."""
    if isinstance(route, ShortLinkRoute):
        return resolve_short_link(client, route.url)
    return route


def lookup_route(client: UpstreamClient, route: CanonicalRoute) -> Lookup:
    route = resolve_route(client, route)
    if isinstance(route, UserRoute):
        return lookup_user(client, route.handle)
    if isinstance(route, VideoRoute):
        return lookup_video(client, route.id)
    if isinstance(route, TagRoute):
        return lookup_tag(client, route.name)
    raise TypeError(f"unsupported route: {route!r}")
