"""Bounded-parallel iteration helpers."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def each_limit(
    items: Iterable[T],
    limit: int,
    worker: Callable[[T], Awaitable[R]],
) -> list[R]:
    """Run ``worker`` over ``items`` with at most ``limit`` calls in flight.

    Workers are started in input order and results are returned in input
    order. With ``limit=1`` each worker finishes before the next one starts.
    The first exception raised by a worker propagates once all started
    workers have settled.

    Args:
        items: Items to process.
        limit: Maximum number of concurrent workers (must be >= 1).
        worker: Async callable applied to each item.

    Returns:
        List of worker results, aligned with ``items``.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")

    items = list(items)
    if limit == 1:
        return [await worker(item) for item in items]

    semaphore = asyncio.Semaphore(limit)

    async def run(item: T) -> R:
        async with semaphore:
            return await worker(item)

    return list(await asyncio.gather(*(run(item) for item in items)))
