"""Redis adapter – RedisCacheClient."""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from stackforge.kernel.errors import ConnectionLostError

RECONNECT_ATTEMPTS = 5


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'redis' to use the Redis adapter") from exc


def _retry_policy(attempts: int) -> Any:
    """redis-py retry: *attempts* reconnects, 50 ms doubling, capped at 1 s."""
    from redis.asyncio.retry import Retry
    from redis.backoff import ExponentialBackoff

    return Retry(ExponentialBackoff(cap=1.0, base=0.05), attempts)


class RedisCacheClient:
    """Async Redis client speaking the :class:`CacheClient` port.

    Values are exchanged as ``str`` (``decode_responses=True``); the
    connection is opened lazily by the first command, usually ``ping``.
    Dropped connections are re-established by redis-py up to
    *reconnect_attempts* times per command; once that gives up the command
    raises :class:`~stackforge.kernel.errors.ConnectionLostError`.
    """

    def __init__(self, url: str, *, reconnect_attempts: int = RECONNECT_ATTEMPTS, **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._reconnect_attempts = reconnect_attempts
        self._connection_error: type[Exception] = aioredis.ConnectionError
        kwargs.setdefault("decode_responses", True)
        kwargs.setdefault("socket_connect_timeout", 2.0)
        kwargs.setdefault("retry", _retry_policy(reconnect_attempts))
        kwargs.setdefault("retry_on_error", [aioredis.ConnectionError, aioredis.TimeoutError])
        self._client = aioredis.from_url(url, **kwargs)

    async def ping(self) -> bool:
        return bool(await self._command(self._client.ping))

    async def get(self, key: str) -> str | None:
        return await self._command(self._client.get, key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        await self._command(self._client.set, key, value, ex=ttl)

    async def delete(self, key: str) -> int:
        return int(await self._command(self._client.delete, key))

    async def close(self) -> None:
        await self._client.aclose()

    async def _command(self, method: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        try:
            return await method(*args, **kwargs)
        except self._connection_error as exc:
            raise ConnectionLostError("redis", self._reconnect_attempts) from exc


__all__ = ["RECONNECT_ATTEMPTS", "RedisCacheClient"]
