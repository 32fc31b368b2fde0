"""Integration tests for the Redis-backed resilient cache.

Uses testcontainers to spawn a real Redis instance.
Run with: pytest tests/integration/test_redis.py -m integration -v
"""
from __future__ import annotations

import asyncio

import pytest

from stackforge.adapters.redis import RedisCacheClient
from stackforge.resilience.cache import ResilientCache
from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry
from stackforge.testing import RecordingErrorReporter

RedisContainer = pytest.importorskip("testcontainers.redis").RedisContainer


def _redis_url(container) -> str:  # type: ignore[no-untyped-def]
    host = container.get_container_host_ip()
    port = container.get_exposed_port(container.port)
    return f"redis://{host}:{port}/0"


@pytest.mark.integration
class TestRedisResilientCacheIntegration:
    def test_binary_round_trip_with_ttl(self) -> None:
        with RedisContainer() as container:
            url = _redis_url(container)

            async def run() -> None:
                client = RedisCacheClient(url)
                cache = ResilientCache(client, CircuitBreakerRegistry(), reporter=RecordingErrorReporter())
                assert await cache.connect()
                payload = bytes(range(256))
                await cache.set("stack:react-express", payload, 60)
                assert await cache.get_bytes("stack:react-express") == payload
                assert await cache.delete("stack:react-express") is True
                assert await cache.get("stack:react-express") is None
                await cache.close()

            asyncio.run(run())

    def test_unreachable_server_disables_cache(self) -> None:
        async def run() -> None:
            reporter = RecordingErrorReporter()
            cache = ResilientCache(
                RedisCacheClient("redis://127.0.0.1:1/0", socket_connect_timeout=0.2),
                CircuitBreakerRegistry(),
                reporter=reporter,
            )
            assert await cache.connect() is False
            assert await cache.get("k") is None
            assert len(reporter.reports) == 1

        asyncio.run(run())
