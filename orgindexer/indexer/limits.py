"""Bounding of simultaneous remote calls."""

import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


class RequestLimiter:
    """
    Runs awaitables under an optional semaphore.

    Must be created inside the running event loop that awaits through it.
    """

    def __init__(self, max_concurrent: int = 0):
        self._semaphore: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(max_concurrent) if max_concurrent > 0 else None
        )

    async def run(self, awaitable: Awaitable[T]) -> T:
        if self._semaphore is None:
            return await awaitable
        async with self._semaphore:
            return await awaitable
