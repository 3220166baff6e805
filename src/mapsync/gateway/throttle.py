"""Serializing rate limiter for destination calls."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class Throttle:
    """Runs one call at a time with a minimum start-to-start spacing.

    A single instance is shared by everything that talks to the destination,
    so no two calls are ever in flight together.
    """

    def __init__(self, min_interval: float = 0.6) -> None:
        self._min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last_start: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            if self._last_start is not None:
                wait = self._last_start + self._min_interval - self._now()
                if wait > 0:
                    await self._wait(wait)
            self._last_start = self._now()
            return await fn()

    @staticmethod
    def _now() -> float:
        return time.monotonic()

    @staticmethod
    async def _wait(seconds: float) -> None:
        await asyncio.sleep(seconds)
