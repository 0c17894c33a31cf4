"""Schema strategy interface plus tolerant readers for untrusted JSON.

Every reader returns a default instead of raising: upstream payloads
routinely omit fields, change types (numbers as strings), or send null.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Generic, Optional, Protocol, Sequence, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T", covariant=True)
E = TypeVar("E")


@runtime_checkable
class SchemaStrategy(Protocol[T]):
    """One historical JSON shape for an entity.

    ``resolve`` returns None when the shape doesn't match, including when
    the top-level key is there but a required nested object is missing.
    """

    name: str

    def resolve(self, doc: dict[str, Any], key: str) -> Optional[T]:
        ...


class Resolver(Generic[E]):
    """Tries strategies in order and returns the first match."""

    def __init__(self, kind: str, strategies: Sequence[SchemaStrategy[E]]) -> None:
        self.kind = kind
        self.strategies = tuple(strategies)

    def __call__(self, doc: Any, key: str) -> Optional[E]:
        if not isinstance(doc, dict):
            return None
        for strategy in self.strategies:
            entity = strategy.resolve(doc, key)
            if entity is not None:
                logger.debug("%s %r resolved via %s", self.kind, key, strategy.name)
                return entity
            logger.debug("%s %r: no match for %s", self.kind, key, strategy.name)
        return None


def obj(value: Any, *path: str) -> dict[str, Any] | None:
    """Walk nested dict keys; None if any step is missing or not an object."""
    current = value
    for step in path:
        if not isinstance(current, dict):
            return None
        current = current.get(step)
    return current if isinstance(current, dict) else None


def get_str(source: dict[str, Any] | None, *keys: str, default: str = "") -> str:
    """First present string among ``keys``."""
    if not source:
        return default
    for key in keys:
        value = source.get(key)
        if isinstance(value, str):
            return value
    return default


def get_opt_str(source: dict[str, Any] | None, key: str) -> str | None:
    if not source:
        return None
    value = source.get(key)
    return value if isinstance(value, str) else None


# ASCII digits only, at most 19 of them.
_INT_RE = re.compile(r"-?[0-9]{1,19}")


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            return int(text)
    return None


def get_count(source: dict[str, Any] | None, *keys: str) -> int:
    """First present non-negative integer among ``keys``, else 0."""
    if not source:
        return 0
    for key in keys:
        number = _as_int(source.get(key))
        if number is not None and number >= 0:
            return number
    return 0


def get_int(source: dict[str, Any] | None, key: str) -> int:
    if not source:
        return 0
    number = _as_int(source.get(key))
    return number if number is not None else 0
