"""State extractor — find the JSON blob the page uses to hydrate itself.

The upstream inlines its client state in a <script> tag. The tag id has
changed across redesigns, so we try each known id in turn, then fall back
to any script whose body mentions one of the legacy module names.

Plain regex over the raw HTML is enough here: all we need is the text of
one script element.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

# Newest first.
STATE_SCRIPT_IDS = (
    "__UNIVERSAL_DATA_FOR_REHYDRATION__",
    "SIGI_STATE",
)

STATE_MARKERS = ('"UserModule"', '"ItemModule"')

_SCRIPT_RE = re.compile(r"<script\b([^>]*)>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)


def _script_id_re(script_id: str) -> re.Pattern[str]:
    return re.compile(r"""\bid\s*=\s*["']%s["']""" % re.escape(script_id))


_ID_RES = [(sid, _script_id_re(sid)) for sid in STATE_SCRIPT_IDS]


def _parse(text: str) -> dict[str, Any] | None:
    try:
        doc = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return doc if isinstance(doc, dict) else None


def extract_state(html: str) -> dict[str, Any] | None:
    """Return the embedded state document, or None if the page has none.

    Never raises on malformed input; a miss is a normal outcome.
    """
    if not html:
        return None

    scripts = [(m.group(1), m.group(2)) for m in _SCRIPT_RE.finditer(html)]

    # 1. Known script ids
    for script_id, id_re in _ID_RES:
        for attrs, body in scripts:
            if not id_re.search(attrs):
                continue
            doc = _parse(body.strip())
            if doc is not None:
                logger.debug("State found in <script id=%s>", script_id)
                return doc
            logger.debug("<script id=%s> present but not valid JSON", script_id)
            break

    # 2. Any script mentioning a legacy module name
    for _attrs, body in scripts:
        if any(marker in body for marker in STATE_MARKERS):
            doc = _parse(body.strip())
            if doc is not None:
                logger.debug("State found via module marker")
                return doc

    return None
