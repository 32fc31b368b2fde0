"""Kernel time – monotonic Clock protocol + implementations."""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Port: abstract monotonic clock for deterministic testing."""

    def monotonic(self) -> float: ...


class SystemClock:
    """Production clock that delegates to ``time.monotonic``."""

    def monotonic(self) -> float:
        return time.monotonic()


class ManualClock:
    """Test clock that only moves when :meth:`advance` is called."""

    def __init__(self, start: float = 1_000.0) -> None:
        self._now = start

    def monotonic(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move the clock forward by *seconds*."""
        self._now += seconds


__all__ = ["Clock", "ManualClock", "SystemClock"]
