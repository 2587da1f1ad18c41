# site_warmer/crawler/gate.py
"""
Admission control for warm-up requests.
"""
from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type


class ConcurrencyGate:
    """Counting gate that lets at most *capacity* holders in at once.

    ``acquire`` suspends until a token is free; ``release`` hands one back.
    The counters are for observation only and never affect admission.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._sem = asyncio.Semaphore(capacity)
        self.in_flight = 0
        self.peak = 0
        self.acquired = 0
        self.released = 0

    async def acquire(self) -> None:
        await self._sem.acquire()
        self.in_flight += 1
        self.acquired += 1
        self.peak = max(self.peak, self.in_flight)

    def release(self) -> None:
        if self.in_flight == 0:
            raise RuntimeError("release() called without a matching acquire()")
        self.in_flight -= 1
        self.released += 1
        self._sem.release()

    def locked(self) -> bool:
        """True when every token is held."""
        return self.in_flight >= self.capacity

    async def __aenter__(self) -> ConcurrencyGate:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<ConcurrencyGate {self.in_flight}/{self.capacity} peak={self.peak}>"


__all__ = ["ConcurrencyGate"]
