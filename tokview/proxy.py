"""Media proxy guard — decides which asset URLs we are willing to re-stream.

The check is a plain substring match on the URL text, not a parsed-host
comparison. A URL such as ``https://evil.example/?x=tiktokcdn.com`` is
therefore accepted. Tightening this to host-suffix matching is tracked as
a hardening item; tests pin the current behavior.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, unquote

from .errors import InvalidProxyTarget

logger = logging.getLogger(__name__)

ALLOWED_MEDIA_DOMAINS = (
    "tiktokcdn.com",
    "tiktokcdn-us.com",
    "tiktokv.com",
    "muscdn.com",
    "byteoversea.com",
    "ibytedtos.com",
    "tiktokcdn-in.com",
)

PROXY_PATH = "/proxy"


def is_allowed_media_host(url: str) -> bool:
    """True if the URL text mentions one of the upstream CDN domains."""
    return any(domain in url for domain in ALLOWED_MEDIA_DOMAINS)


def guard_media_url(raw: str) -> str:
    """Decode a proxy ``url`` parameter and check it against the allow-list.

    Returns the decoded URL. Raises InvalidProxyTarget before any fetch
    is attempted if the URL is empty, not http(s), or not allow-listed.
    """
    url = unquote(raw or "").strip()
    if not url.lower().startswith(("http://", "https://")):
        raise InvalidProxyTarget(f"not an absolute http(s) url: {url[:120]!r}")
    if not is_allowed_media_host(url):
        raise InvalidProxyTarget(f"host not allow-listed: {url[:120]!r}")
    logger.debug("Proxying media: %s", url)
    return url


def proxied_url(url: str) -> str:
    """Same-origin proxy path for an upstream media URL ("" stays "")."""
    if not url:
        return ""
    return f"{PROXY_PATH}?url={quote(url, safe='')}"
