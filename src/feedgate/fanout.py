"""Fan-out / fan-in barrier for independent sub-fetches.

Each branch is wrapped so that a failure becomes a default contribution
before the join. The join therefore never fails because of a branch, and
results come back in the order the branches were issued, not the order they
completed.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

T = TypeVar("T")

log = structlog.get_logger()


async def _settle(
    label: str,
    branch: Awaitable[T],
    default: Callable[[], T],
    source: str,
) -> T:
    try:
        return await branch
    except Exception as exc:
        log.warning(
            "sub_fetch_failed",
            source=source,
            branch=label,
            error=str(exc),
            exc_info=True,
        )
        return default()


async def gather_settled(
    branches: Sequence[tuple[str, Awaitable[T]]],
    *,
    default: Callable[[], T],
    source: str,
) -> list[T]:
    """Run all branches concurrently and wait for every one to settle.

    ``branches`` is a sequence of ``(label, awaitable)`` pairs; the label only
    identifies the branch in logs. ``default`` is called once per failed
    branch so mutable defaults are never shared.
    """
    if not branches:
        return []
    return list(
        await asyncio.gather(
            *(_settle(label, branch, default, source) for label, branch in branches)
        )
    )
