"""Minimum-interval rate limiting for provider batches."""
import asyncio
import time
from typing import Awaitable, Callable, Optional

Sleep = Callable[[float], Awaitable[None]]


class RateLimiter:
    """Spaces successive acquisitions at least ``min_interval`` seconds apart.

    A leaky bucket with a capacity of one: the first ``acquire`` passes
    immediately, later ones wait out whatever is left of the interval.
    The clock and sleep functions are injectable so tests run without real
    delays.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        self.min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """Wait for the next slot.

        Returns:
            Seconds spent waiting
        """
        async with self._lock:
            waited = 0.0
            if self._last is not None:
                remaining = self.min_interval - (self._clock() - self._last)
                if remaining > 0:
                    await self._sleep(remaining)
                    waited = remaining
            self._last = self._clock()
            return waited

    def reset(self) -> None:
        """Forget the last acquisition so the next one passes immediately."""
        self._last = None
