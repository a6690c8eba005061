"""Ordered multi-source resolution.

Invariants:
- Attempts run sequentially; an earlier attempt that yields a valid value wins.
- A transport failure moves on to the next attempt; other exceptions propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from reliva.sources.http import UpstreamError

T = TypeVar("T")

logger = logging.getLogger("reliva.services.resolver")


@dataclass(slots=True)
class Attempt(Generic[T]):
    source: str
    call: Callable[[], Awaitable[T]]


@dataclass(slots=True)
class Resolution(Generic[T]):
    source: str
    value: T
    position: int


async def resolve_first(
    key: str,
    attempts: Sequence[Attempt[Any]],
    is_valid: Callable[[Any], bool],
) -> Resolution[Any] | None:
    """Return the first attempt whose result passes ``is_valid``, or None."""
    for position, attempt in enumerate(attempts):
        try:
            value = await attempt.call()
        except UpstreamError as exc:
            logger.info("Source %s failed for %s: %s", attempt.source, key, exc)
            continue
        if is_valid(value):
            return Resolution(source=attempt.source, value=value, position=position)
        logger.info("Source %s returned no usable record for %s", attempt.source, key)
    return None
