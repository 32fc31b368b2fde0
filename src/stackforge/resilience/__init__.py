"""Resilience – circuit breaker, backoff, resilient cache."""

from stackforge.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerPolicy,
    CircuitBreakerRegistry,
    CircuitBreakerState,
)
from stackforge.resilience.retry import BackoffStrategy, ExponentialBackoff
from stackforge.resilience.cache import CacheAsidePolicy, ResilientCache

__all__ = [
    "BackoffStrategy",
    "CacheAsidePolicy",
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerRegistry",
    "CircuitBreakerState",
    "ExponentialBackoff",
    "ResilientCache",
]
