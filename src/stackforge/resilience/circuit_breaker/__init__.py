"""Resilience – Circuit Breaker pattern."""
from stackforge.kernel.errors import CallTimeoutError, CircuitOpenError
from stackforge.resilience.circuit_breaker.state import CircuitBreakerState
from stackforge.resilience.circuit_breaker.policy import DEFAULT_POLICY, CircuitBreakerPolicy
from stackforge.resilience.circuit_breaker.stats import RollingStats
from stackforge.resilience.circuit_breaker.breaker import CircuitBreaker
from stackforge.resilience.circuit_breaker.registry import CircuitBreakerRegistry

__all__ = [
    "DEFAULT_POLICY",
    "CallTimeoutError",
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerRegistry",
    "CircuitBreakerState",
    "CircuitOpenError",
    "RollingStats",
]
