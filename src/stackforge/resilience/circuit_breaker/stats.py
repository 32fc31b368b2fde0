"""Resilience – bucketed rolling-window statistics for circuit breakers."""
from __future__ import annotations

from collections import deque
from typing import Literal

from stackforge.kernel.time import Clock, SystemClock

Outcome = Literal["successes", "failures", "timeouts", "rejections", "fallbacks"]
OUTCOMES: tuple[Outcome, ...] = ("successes", "failures", "timeouts", "rejections", "fallbacks")


class RollingStats:
    """Counts call outcomes over the last ``window_seconds``.

    The window is split into ``buckets`` slots of equal length; a slot is
    dropped once it falls entirely outside the window.
    """

    def __init__(self, window_seconds: float, buckets: int, clock: Clock | None = None) -> None:
        self._bucket_seconds = window_seconds / buckets
        self._max_buckets = buckets
        self._clock = clock or SystemClock()
        self._buckets: deque[tuple[int, dict[str, int]]] = deque()

    def _bucket_index(self) -> int:
        return int(self._clock.monotonic() // self._bucket_seconds)

    def record(self, outcome: Outcome) -> None:
        index = self._bucket_index()
        if not self._buckets or self._buckets[-1][0] != index:
            self._buckets.append((index, dict.fromkeys(OUTCOMES, 0)))
        while self._buckets and self._buckets[0][0] <= index - self._max_buckets:
            self._buckets.popleft()
        self._buckets[-1][1][outcome] += 1

    def snapshot(self) -> dict[str, float]:
        """Totals over the live window; read-only."""
        oldest_live = self._bucket_index() - self._max_buckets
        totals: dict[str, float] = dict.fromkeys(OUTCOMES, 0)
        for index, counts in self._buckets:
            if index > oldest_live:
                for key, value in counts.items():
                    totals[key] += value
        calls = totals["successes"] + totals["failures"] + totals["timeouts"]
        totals["calls"] = calls
        totals["error_percentage"] = (
            (totals["failures"] + totals["timeouts"]) / calls * 100 if calls else 0.0
        )
        return totals

    def reset(self) -> None:
        self._buckets.clear()


__all__ = ["OUTCOMES", "Outcome", "RollingStats"]
