"""Resilience – ResilientCache, the best-effort lookaside cache facade.

Every operation is safe to call when the backing store is missing or down:
reads answer ``None``, writes are dropped and deletes answer ``False``.
Reads and writes run through circuit breakers named ``cache-get``,
``cache-set`` and ``cache-delete`` so a struggling store is cut off quickly.
A connection the client reports as lost for good disables the cache for
the rest of the process, as a failed start-up does.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

from stackforge.kernel.errors import CircuitOpenError, ConnectionLostError, SerializationError
from stackforge.observability.errors import ErrorReporter, LoggingErrorReporter
from stackforge.resilience.circuit_breaker import CircuitBreakerPolicy, CircuitBreakerRegistry
from stackforge.resilience.cache.values import Binary, Json, Text, decode_envelope, encode_envelope, tag
from stackforge.resilience.retry import BackoffStrategy, ExponentialBackoff

logger = logging.getLogger(__name__)

CACHE_BREAKER_POLICY = CircuitBreakerPolicy(timeout_seconds=3.0, error_threshold_percentage=25.0)
MAX_CONNECT_ATTEMPTS = 5


class CacheClient(Protocol):
    """Port: string-oriented key/value store (Redis-like)."""

    async def ping(self) -> Any: ...
    async def get(self, key: str) -> str | bytes | None: ...
    async def set(self, key: str, value: str, ttl: int | None = None) -> Any: ...
    async def delete(self, key: str) -> Any: ...
    async def close(self) -> None: ...


class ResilientCache:
    """Cache facade that never raises to its callers.

    Parameters
    ----------
    client:
        The backing store client, or ``None`` when no cache is configured.
    registry:
        Circuit breaker registry shared with the rest of the process.
    reporter:
        Sink for unexpected failures.
    max_connect_attempts:
        Connection attempts made by :meth:`connect` before the cache is
        disabled for the remainder of the process.
    """

    def __init__(
        self,
        client: CacheClient | None,
        registry: CircuitBreakerRegistry,
        *,
        reporter: ErrorReporter | None = None,
        policy: CircuitBreakerPolicy = CACHE_BREAKER_POLICY,
        max_connect_attempts: int = MAX_CONNECT_ATTEMPTS,
        backoff: BackoffStrategy | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._registry = registry
        self._reporter = reporter if reporter is not None else LoggingErrorReporter()
        self._policy = policy
        self._max_attempts = max_connect_attempts
        self._backoff = backoff or ExponentialBackoff(base_delay=0.05, max_delay=1.0)
        self._sleep = sleep
        self._connected = False
        self._disabled = client is None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> bool:
        """Establish the connection, retrying with bounded backoff.

        Returns ``True`` when connected. After ``max_connect_attempts``
        failures the cache is disabled for good and later calls return
        ``False`` without contacting the store.
        """
        if self._disabled or self._client is None:
            return False
        if self._connected:
            return True

        last_error: Exception | None = None
        for attempt in range(1, self._max_attempts + 1):
            try:
                await self._client.ping()
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                logger.warning(
                    "cache.connect_failed attempt=%d max_attempts=%d error=%r",
                    attempt, self._max_attempts, exc,
                )
                if attempt < self._max_attempts:
                    await self._sleep(self._backoff.compute(attempt))
                continue
            self._connected = True
            logger.info("cache.connected attempt=%d", attempt)
            return True

        self._disabled = True
        logger.warning("cache.disabled reason=connect_failed attempts=%d", self._max_attempts)
        if last_error is not None:
            self._reporter.report_error(
                last_error, {"context": "cache initialization", "attempts": self._max_attempts}
            )
        return False

    def is_available(self) -> bool:
        return self._connected and not self._disabled

    async def close(self) -> None:
        if self._client is None or not self._connected:
            return
        try:
            await self._client.close()
            logger.info("cache.closed")
        except Exception as exc:  # noqa: BLE001
            logger.error("cache.close_failed error=%r", exc)
        finally:
            self._connected = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Text | Binary | Json | None:
        """Return the tagged value under *key*, or ``None``."""
        if not self.is_available():
            return None
        raw = await self._guarded("cache-get", self._client.get, key)  # type: ignore[union-attr]
        if raw is None:
            return None
        try:
            return decode_envelope(raw)
        except SerializationError as exc:
            self._reporter.report_error(exc, {"context": "cache get", "key": key})
            return None

    async def get_bytes(self, key: str) -> bytes | None:
        value = await self.get(key)
        return value.value if isinstance(value, Binary) else None

    async def get_text(self, key: str) -> str | None:
        value = await self.get(key)
        return value.value if isinstance(value, Text) else None

    async def get_json(self, key: str) -> Any:
        value = await self.get(key)
        return value.value if isinstance(value, Json) else None

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Store *value* under *key*, optionally expiring after *ttl_seconds*.

        ``bytes`` are stored as :class:`Binary`, ``str`` as :class:`Text`
        and anything else as :class:`Json` unless already tagged.
        """
        if not self.is_available():
            return
        try:
            encoded = encode_envelope(tag(value))
        except SerializationError as exc:
            self._reporter.report_error(exc, {"context": "cache set", "key": key})
            return
        ttl = ttl_seconds if ttl_seconds else None
        await self._guarded("cache-set", self._client.set, key, encoded, ttl)  # type: ignore[union-attr]

    async def delete(self, key: str) -> bool:
        if not self.is_available():
            return False
        marker = object()
        outcome = await self._guarded(
            "cache-delete", self._client.delete, key, default=marker  # type: ignore[union-attr]
        )
        return outcome is not marker

    async def _guarded(
        self,
        breaker_name: str,
        operation: Callable[..., Awaitable[Any]],
        *args: Any,
        default: Any = None,
    ) -> Any:
        try:
            return await self._registry.execute(breaker_name, operation, args, policy=self._policy)
        except CircuitOpenError:
            logger.debug("cache.skipped breaker=%s reason=circuit_open", breaker_name)
        except ConnectionLostError as exc:
            self._disabled = True
            logger.warning("cache.disabled reason=connection_lost breaker=%s error=%r", breaker_name, exc)
            self._reporter.report_error(exc, {"context": "cache connection", "breaker": breaker_name})
        except Exception as exc:  # noqa: BLE001
            key = args[0] if args else None
            logger.error("cache.operation_failed breaker=%s key=%s error=%r", breaker_name, key, exc)
            self._reporter.report_error(exc, {"context": breaker_name, "key": key})
        return default


__all__ = ["CACHE_BREAKER_POLICY", "MAX_CONNECT_ATTEMPTS", "CacheClient", "ResilientCache"]
