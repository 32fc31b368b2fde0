"""Resilience – CircuitBreaker implementation."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from stackforge.kernel.errors import CallTimeoutError, CircuitOpenError
from stackforge.kernel.time import Clock, SystemClock
from stackforge.resilience.circuit_breaker.policy import DEFAULT_POLICY, CircuitBreakerPolicy
from stackforge.resilience.circuit_breaker.state import CircuitBreakerState
from stackforge.resilience.circuit_breaker.stats import RollingStats

T = TypeVar("T")
logger = logging.getLogger(__name__)

Operation = Callable[..., Awaitable[T]]
Fallback = Callable[..., Any]


class CircuitBreaker(Generic[T]):
    """asyncio-safe circuit breaker with a bucketed rolling error rate.

    CLOSED lets calls through and opens once the window holds at least
    ``volume_threshold`` calls with an error percentage above the
    threshold. OPEN rejects without invoking the operation until
    ``reset_timeout_seconds`` have passed, then HALF_OPEN admits a single
    trial call whose outcome closes or re-opens the circuit.

    Each call runs under ``asyncio.timeout``, so a timed-out operation is
    cancelled at its next suspension point. Work it already handed to a
    thread or another process is not interrupted. A ``TimeoutError`` the
    operation raises on its own counts as an ordinary failure.
    """

    def __init__(
        self,
        name: str,
        operation: Operation[T] | None = None,
        policy: CircuitBreakerPolicy | None = None,
        *,
        fallback: Fallback | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.name = name
        self._operation = operation
        self._policy = policy or DEFAULT_POLICY
        self._fallback = fallback
        self._clock = clock or SystemClock()
        self._stats = RollingStats(
            self._policy.rolling_window_seconds,
            self._policy.rolling_window_buckets,
            self._clock,
        )
        self._state = CircuitBreakerState.CLOSED
        self._opened_at: float | None = None
        self._trial_in_flight = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitBreakerState:
        return self._state

    @property
    def policy(self) -> CircuitBreakerPolicy:
        return self._policy

    def fallback(self, fn: Fallback | None) -> None:
        """Set (or clear) the fallback used when a call fails or is rejected."""
        self._fallback = fn

    async def fire(self, *args: Any, **kwargs: Any) -> T:
        """Invoke the bound operation with *args* / *kwargs*."""
        if self._operation is None:
            raise TypeError(f"Circuit breaker '{self.name}' has no bound operation")
        return await self.invoke(self._operation, args, kwargs)

    async def call(self, func: Operation[T], *args: Any, **kwargs: Any) -> T:
        """Invoke *func* under this breaker's state machine."""
        return await self.invoke(func, args, kwargs)

    async def invoke(
        self,
        func: Operation[T],
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
        fallback: Fallback | None = None,
    ) -> T:
        kwargs = kwargs or {}
        fallback = fallback or self._fallback

        async with self._lock:
            admitted, trial = self._admit()
        if not admitted:
            self._stats.record("rejections")
            logger.warning("circuit_breaker.rejected name=%s state=%s", self.name, self._state.value)
            if fallback is None:
                raise CircuitOpenError(self.name)
            return await self._run_fallback(fallback, args, kwargs)

        deadline = asyncio.timeout(self._policy.timeout_seconds)
        try:
            async with deadline:
                result = await func(*args, **kwargs)
        except asyncio.CancelledError:
            async with self._lock:
                if trial:
                    self._trial_in_flight = False
            raise
        except TimeoutError as exc:
            if not deadline.expired():
                # raised by the operation itself, e.g. a socket timeout
                return await self._on_error(exc, trial, fallback, args, kwargs)
            logger.warning(
                "circuit_breaker.timeout name=%s timeout=%.2fs", self.name, self._policy.timeout_seconds
            )
            async with self._lock:
                self._on_failure(trial, timed_out=True)
            error = CallTimeoutError(self.name, self._policy.timeout_seconds)
            if fallback is None:
                raise error from exc
            return await self._run_fallback(fallback, args, kwargs)
        except Exception as exc:
            return await self._on_error(exc, trial, fallback, args, kwargs)

        async with self._lock:
            self._on_success(trial)
        return result

    async def _on_error(
        self,
        exc: Exception,
        trial: bool,
        fallback: Fallback | None,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> T:
        if self._is_filtered(exc):
            async with self._lock:
                self._on_success(trial)
        else:
            logger.warning("circuit_breaker.failure name=%s error=%r", self.name, exc)
            async with self._lock:
                self._on_failure(trial, timed_out=False)
        if fallback is None:
            raise exc
        return await self._run_fallback(fallback, args, kwargs)

    def health(self) -> dict[str, Any]:
        """Current state and rolling statistics; never changes the breaker."""
        return {"state": self._state.value, "stats": self._stats.snapshot()}

    # ------------------------------------------------------------------
    # State machine (called with the lock held)
    # ------------------------------------------------------------------

    def _admit(self) -> tuple[bool, bool]:
        """Return ``(admitted, is_trial)`` for an incoming call."""
        if self._state == CircuitBreakerState.OPEN:
            assert self._opened_at is not None
            if self._clock.monotonic() - self._opened_at < self._policy.reset_timeout_seconds:
                return False, False
            self._transition(CircuitBreakerState.HALF_OPEN)
        if self._state == CircuitBreakerState.HALF_OPEN:
            if self._trial_in_flight:
                return False, False
            self._trial_in_flight = True
            return True, True
        return True, False

    def _on_success(self, trial: bool) -> None:
        self._stats.record("successes")
        if trial:
            self._trial_in_flight = False
            self._stats.reset()
            self._transition(CircuitBreakerState.CLOSED)

    def _on_failure(self, trial: bool, *, timed_out: bool) -> None:
        self._stats.record("timeouts" if timed_out else "failures")
        if trial:
            self._trial_in_flight = False
            self._open()
            return
        if self._state != CircuitBreakerState.CLOSED:
            return
        snapshot = self._stats.snapshot()
        if (
            snapshot["calls"] >= self._policy.volume_threshold
            and snapshot["error_percentage"] > self._policy.error_threshold_percentage
        ):
            self._open()

    def _open(self) -> None:
        self._opened_at = self._clock.monotonic()
        self._transition(CircuitBreakerState.OPEN)

    def _transition(self, new_state: CircuitBreakerState) -> None:
        if new_state == self._state and new_state != CircuitBreakerState.OPEN:
            return
        log = logger.error if new_state == CircuitBreakerState.OPEN else logger.info
        log("circuit_breaker.%s name=%s", new_state.value.lower(), self.name)
        self._state = new_state

    def _is_filtered(self, exc: BaseException) -> bool:
        error_filter = self._policy.error_filter
        if error_filter is None:
            return False
        try:
            return bool(error_filter(exc))
        except Exception:  # noqa: BLE001
            logger.exception("circuit_breaker.error_filter_failed name=%s", self.name)
            return False

    async def _run_fallback(self, fallback: Fallback, args: tuple[Any, ...], kwargs: dict[str, Any]) -> T:
        self._stats.record("fallbacks")
        logger.info("circuit_breaker.fallback name=%s", self.name)
        result = fallback(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result  # type: ignore[return-value]


__all__ = ["CircuitBreaker", "Fallback", "Operation"]
