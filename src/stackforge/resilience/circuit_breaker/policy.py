"""Resilience – CircuitBreakerPolicy."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable

ErrorFilter = Callable[[BaseException], bool]


@dataclasses.dataclass(frozen=True)
class CircuitBreakerPolicy:
    """Configuration for a circuit breaker.

    ``error_filter`` returns ``True`` for errors that must *not* count
    towards the error threshold (they are still raised to the caller).
    """

    timeout_seconds: float = 10.0
    error_threshold_percentage: float = 50.0
    reset_timeout_seconds: float = 30.0
    rolling_window_seconds: float = 60.0
    rolling_window_buckets: int = 10
    volume_threshold: int = 5
    error_filter: ErrorFilter | None = None

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if not 0 <= self.error_threshold_percentage <= 100:
            raise ValueError("error_threshold_percentage must be within [0, 100]")
        if self.rolling_window_seconds <= 0 or self.rolling_window_buckets < 1:
            raise ValueError("rolling window needs a positive duration and at least one bucket")
        if self.volume_threshold < 0:
            raise ValueError("volume_threshold must be >= 0")

    def with_overrides(self, **overrides: Any) -> CircuitBreakerPolicy:
        return dataclasses.replace(self, **overrides) if overrides else self


DEFAULT_POLICY = CircuitBreakerPolicy()

__all__ = ["DEFAULT_POLICY", "CircuitBreakerPolicy", "ErrorFilter"]
