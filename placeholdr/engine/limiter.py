"""Raster permit pool — caps concurrent raster encodes.

Acquisition has no timeout: a request waits until a permit frees up.
Vector and cache-hit requests never touch the pool.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class RasterLimiter:
    def __init__(self, capacity: int = 4) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self.in_use = 0
        # Highest number of permits held at once
        self.peak = 0

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block; always released."""
        await self._semaphore.acquire()
        self.in_use += 1
        self.peak = max(self.peak, self.in_use)
        try:
            yield
        finally:
            self.in_use -= 1
            self._semaphore.release()
