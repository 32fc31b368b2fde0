"""Unit tests for the Redis cache client — no running Redis required."""
from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from stackforge.kernel.errors import ConnectionLostError


class FakeRedisConnectionError(Exception):
    pass


class FakeRedisTimeoutError(Exception):
    pass


RETRY = object()


def _make_client(**kwargs: Any) -> tuple[Any, MagicMock, MagicMock]:
    """Return (RedisCacheClient, mock_redis, mock_aioredis_module)."""
    mock_redis = MagicMock()
    mock_redis.ping = AsyncMock(return_value=True)
    mock_redis.get = AsyncMock(return_value=None)
    mock_redis.set = AsyncMock(return_value=True)
    mock_redis.delete = AsyncMock(return_value=1)
    mock_redis.aclose = AsyncMock()

    import stackforge.adapters.redis.cache as cache_mod

    mock_aioredis = MagicMock()
    mock_aioredis.from_url = MagicMock(return_value=mock_redis)
    mock_aioredis.ConnectionError = FakeRedisConnectionError
    mock_aioredis.TimeoutError = FakeRedisTimeoutError

    with patch.object(cache_mod, "_require_redis", return_value=mock_aioredis), patch.object(
        cache_mod, "_retry_policy", return_value=RETRY
    ) as retry_policy:
        client = cache_mod.RedisCacheClient("redis://localhost:6379/0", **kwargs)
        mock_aioredis.retry_policy = retry_policy

    return client, mock_redis, mock_aioredis


class TestRedisCacheClient:
    def test_from_url_defaults(self) -> None:
        _, _, aioredis = _make_client()
        aioredis.from_url.assert_called_once_with(
            "redis://localhost:6379/0",
            decode_responses=True,
            socket_connect_timeout=2.0,
            retry=RETRY,
            retry_on_error=[FakeRedisConnectionError, FakeRedisTimeoutError],
        )
        aioredis.retry_policy.assert_called_once_with(5)

    def test_reconnect_attempts_configurable(self) -> None:
        _, _, aioredis = _make_client(reconnect_attempts=2)
        aioredis.retry_policy.assert_called_once_with(2)
        assert "reconnect_attempts" not in aioredis.from_url.call_args.kwargs

    def test_exhausted_reconnects_raise_connection_lost(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            redis.get = AsyncMock(side_effect=FakeRedisConnectionError("Connection refused"))
            with pytest.raises(ConnectionLostError) as info:
                await client.get("k")
            assert info.value.dependency == "redis"
            assert info.value.attempts == 5
            assert isinstance(info.value.__cause__, FakeRedisConnectionError)

        asyncio.run(run())

    def test_other_redis_errors_pass_through(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            redis.set = AsyncMock(side_effect=FakeRedisTimeoutError("slow"))
            with pytest.raises(FakeRedisTimeoutError):
                await client.set("k", "v")

        asyncio.run(run())

    def test_caller_kwargs_win(self) -> None:
        _, _, aioredis = _make_client(socket_connect_timeout=0.5)
        assert aioredis.from_url.call_args.kwargs["socket_connect_timeout"] == 0.5

    def test_ping(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            assert await client.ping() is True
            redis.ping.assert_awaited_once()

        asyncio.run(run())

    def test_get_passes_through(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            redis.get = AsyncMock(return_value='{"kind":"text","payload":"x"}')
            assert await client.get("k") == '{"kind":"text","payload":"x"}'
            redis.get.assert_awaited_once_with("k")

        asyncio.run(run())

    def test_set_uses_ex_for_ttl(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            await client.set("k", "v", 86400)
            redis.set.assert_awaited_once_with("k", "v", ex=86400)
            await client.set("k2", "v")
            redis.set.assert_awaited_with("k2", "v", ex=None)

        asyncio.run(run())

    def test_delete_returns_count(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            assert await client.delete("k") == 1
            redis.delete.assert_awaited_once_with("k")

        asyncio.run(run())

    def test_close_uses_aclose(self) -> None:
        async def run() -> None:
            client, redis, _ = _make_client()
            await client.close()
            redis.aclose.assert_awaited_once()

        asyncio.run(run())

    def test_missing_dependency_hint(self) -> None:
        import stackforge.adapters.redis.cache as cache_mod

        with patch.dict("sys.modules", {"redis": None, "redis.asyncio": None}):
            with pytest.raises(ImportError, match="Install 'redis'"):
                cache_mod._require_redis()
