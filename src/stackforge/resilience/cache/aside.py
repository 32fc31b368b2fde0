"""Resilience – Cache-Aside (lookaside) policy over the cache facade."""
from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Generic, TypeVar

from stackforge.resilience.cache.facade import ResilientCache

__all__ = [
    "CacheAsidePolicy",
    "cache_aside",
]

T = TypeVar("T")
logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86_400


class CacheAsidePolicy(Generic[T]):
    """Lazy-loading lookaside: read the cache, fall back to *loader*, fill.

    Concurrent misses for one key each run the loader and each write the
    cache; the last write wins. Loader errors propagate, cache errors never
    do.
    """

    def __init__(self, cache: ResilientCache, ttl_seconds: int | None = DEFAULT_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl_seconds

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("cache.hit key=%s", key)
            return cached.value  # type: ignore[no-any-return]

        logger.debug("cache.miss key=%s", key)
        value = await loader()
        if value is not None:
            await self._cache.set(key, value, self._ttl)
        return value


def cache_aside(
    cache: ResilientCache,
    key_fn: Callable[..., str],
    ttl_seconds: int | None = DEFAULT_TTL_SECONDS,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator version of :class:`CacheAsidePolicy`."""

    policy: CacheAsidePolicy[T] = CacheAsidePolicy(cache, ttl_seconds)

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await policy.get_or_load(key_fn(*args, **kwargs), lambda: fn(*args, **kwargs))

        wrapper._policy = policy  # type: ignore[attr-defined]
        return wrapper

    return decorator
