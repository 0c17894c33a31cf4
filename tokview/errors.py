"""Errors that reach the HTTP boundary.

Extraction and resolution misses are not errors: they return None and
the caller degrades to a placeholder entity (see fallback.py).
"""

from __future__ import annotations


class TokviewError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or self.message)


class NotFound(TokviewError):
    """The upstream resource does not exist (HTTP 404 upstream)."""

    status_code = 404
    message = "TikTok content not found"


class FetchFailure(TokviewError):
    """Network error or non-2xx status from upstream.

    ``detail`` is meant for logs; users only see ``message``.
    """

    status_code = 502
    message = "Failed to fetch from TikTok"


class InvalidProxyTarget(TokviewError):
    """Media URL is malformed or outside the CDN allow-list."""

    status_code = 400
    message = "Invalid URL format"
