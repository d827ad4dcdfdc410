"""Delayed-fallback evaluation of search coroutines.

``race_with_delay_offset`` favours a slow but complete primary search, and
only starts a cheaper fallback once a delay has elapsed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

__all__ = ["race_with_delay_offset"]

T = TypeVar("T")


async def race_with_delay_offset(
    primary: Awaitable[T],
    fallback: Callable[[], Awaitable[T]],
    timeout: float,
    accept: Callable[[T], bool] | None = None,
) -> T:
    """Favour ``primary``; start ``fallback`` only after ``timeout`` seconds.

    This is deliberately not a plain race. A primary that finishes within the
    delay always wins, even if it is empty or slower than the fallback would
    have been. Once the delay has elapsed, the first of the two to finish
    with an acceptable value wins. If neither value is acceptable, the
    fallback's value is preferred over the primary's. The losing task is
    cancelled.

    Args:
        primary: The in-flight, preferred computation.
        fallback: Factory for the cheaper computation.
        timeout: Delay in seconds before the fallback is started.
        accept: Predicate deciding if a value ends the race after the delay.
            Defaults to accepting anything.

    Returns:
        The winning value.

    Raises:
        Exception: The primary's error if it fails within the delay, or the
            fallback's error if both computations fail.

    """
    primary_task = asyncio.ensure_future(primary)
    tasks: list[asyncio.Future[T]] = [primary_task]
    try:
        done, _ = await asyncio.wait({primary_task}, timeout=timeout)
        if primary_task in done:
            return primary_task.result()

        logger.debug("Primary search exceeded %.3fs, starting fallback", timeout)
        fallback_task = asyncio.ensure_future(fallback())
        tasks.append(fallback_task)

        pending: set[asyncio.Future[T]] = set(tasks)
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in tasks:
                if task in done and task.exception() is None:
                    value = task.result()
                    if accept is None or accept(value):
                        return value

        for task in reversed(tasks):
            if task.exception() is None:
                return task.result()
        error = fallback_task.exception()
        assert error is not None
        raise error
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
