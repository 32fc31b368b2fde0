"""Resilience – CircuitBreakerRegistry.

One registry is built at start-up and handed to every component that guards
an outbound call. Breakers are keyed by name and live as long as the
registry; the first creation request for a name fixes its configuration.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator

from stackforge.kernel.time import Clock, SystemClock
from stackforge.resilience.circuit_breaker.breaker import CircuitBreaker, Fallback, Operation
from stackforge.resilience.circuit_breaker.policy import DEFAULT_POLICY, CircuitBreakerPolicy

logger = logging.getLogger(__name__)


class CircuitBreakerRegistry:
    """Name-keyed, create-once store of :class:`CircuitBreaker` instances.

    Creation-by-name involves no suspension point, so concurrent coroutines
    cannot race into two breakers for the same name on one event loop.
    Sharing a registry across threads needs an external lock.
    """

    def __init__(
        self,
        default_policy: CircuitBreakerPolicy | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._default_policy = default_policy or DEFAULT_POLICY
        self._clock = clock or SystemClock()
        self._breakers: dict[str, CircuitBreaker[Any]] = {}

    def create_or_get(
        self,
        name: str,
        operation: Operation[Any] | None = None,
        policy: CircuitBreakerPolicy | None = None,
        **overrides: Any,
    ) -> CircuitBreaker[Any]:
        """Return the breaker called *name*, creating it on first use.

        *policy* and *overrides* only apply when the breaker is created.
        """
        existing = self._breakers.get(name)
        if existing is not None:
            return existing
        effective = (policy or self._default_policy).with_overrides(**overrides)
        breaker: CircuitBreaker[Any] = CircuitBreaker(name, operation, effective, clock=self._clock)
        self._breakers[name] = breaker
        logger.debug("circuit_breaker.created name=%s policy=%s", name, effective)
        return breaker

    def get(self, name: str) -> CircuitBreaker[Any] | None:
        return self._breakers.get(name)

    async def execute(
        self,
        name: str,
        operation: Operation[Any],
        args: tuple[Any, ...] | list[Any] = (),
        fallback: Fallback | None = None,
        policy: CircuitBreakerPolicy | None = None,
        **overrides: Any,
    ) -> Any:
        """Run *operation(*args)* through the breaker called *name*.

        The breaker is created on first use. *operation* is the work run on
        this call; *fallback* applies to this call only and takes precedence
        over a fallback configured on the breaker.
        """
        breaker = self.create_or_get(name, operation, policy, **overrides)
        return await breaker.invoke(operation, tuple(args), None, fallback)

    def get_health(self) -> dict[str, dict[str, Any]]:
        return {name: breaker.health() for name, breaker in self._breakers.items()}

    def names(self) -> list[str]:
        return list(self._breakers)

    def __contains__(self, name: object) -> bool:
        return name in self._breakers

    def __len__(self) -> int:
        return len(self._breakers)

    def __iter__(self) -> Iterator[CircuitBreaker[Any]]:
        return iter(list(self._breakers.values()))


__all__ = ["CircuitBreakerRegistry"]
