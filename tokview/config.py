"""Settings for tokview, read from the process environment.

A dotenv file can pre-seed the environment: ``./.env`` is tried first,
then ``./.tokview/.env``. Only the first one found is read, and real
environment variables always win over it. Keys nobody set fall back to
``DEFAULTS``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

_loaded = False

DEFAULTS = {
    "TOKVIEW_UPSTREAM_BASE": "https://www.tiktok.com",
    "TOKVIEW_USER_AGENT": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "TOKVIEW_TIMEOUT": "30",
    "TOKVIEW_MAX_REDIRECTS": "10",
    "TOKVIEW_PORT": "3000",
    "TOKVIEW_LOG_LEVEL": "INFO",
}

ENV_FILES = (Path(".env"), Path(".tokview") / ".env")


def _env_pairs(text: str) -> Iterator[tuple[str, str]]:
    """Yield (key, value) from dotenv text.

    Accepts ``KEY=value``, ``export KEY=value`` and a matching pair of
    quotes around the value. Blank lines, comments and lines without a
    key are skipped.
    """
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        yield key, value


def _find_env_file(root: Path) -> Path | None:
    for candidate in ENV_FILES:
        path = root / candidate
        if path.is_file():
            return path
    return None


def load_config() -> None:
    """Copy the first env file found into os.environ, once per process.

    Variables already in the environment are left alone.
    """
    global _loaded
    if _loaded:
        return
    _loaded = True

    path = _find_env_file(Path.cwd())
    if path is None:
        return
    for key, value in _env_pairs(path.read_text(encoding="utf-8")):
        os.environ.setdefault(key, value)
    logger.debug("Read settings from %s", path)


def get(key: str, default: str | None = None) -> str:
    """Value for ``key``, reading the env file on first use."""
    load_config()
    if default is None:
        default = DEFAULTS.get(key, "")
    return os.environ.get(key, default)


def get_int(key: str, default: int | None = None) -> int:
    raw = get(key, None if default is None else str(default))
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", key, raw)
        return default if default is not None else int(DEFAULTS[key])
