"""FastAPI adapter – application factory.

Everything stateful (breaker registry, cache facade, data access, archive
pipeline) is built once here and published on ``app.state``; routes read
it from there instead of from module globals.

Run with::

    uvicorn stackforge.adapters.fastapi.app:build_app --factory
"""
from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator

from stackforge.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from stackforge.adapters.fastapi.routers import FastAPIHealthRouter, StackRouter
from stackforge.adapters.mongodb import ResilientDataAccess, connect_database
from stackforge.application.archive import ArchivePipeline
from stackforge.config import StackforgeSettings, load_settings
from stackforge.observability import ErrorReporter, JsonLoggerFactory, LoggingErrorReporter, Metrics, NoopMetrics
from stackforge.resilience.cache import ResilientCache
from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry

logger = logging.getLogger(__name__)


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'fastapi' to use the FastAPI adapter") from exc


def _default_reporter(settings: StackforgeSettings) -> ErrorReporter:
    if settings.sentry_dsn:
        from stackforge.adapters.sentry import SentryErrorReporter, init_sentry

        init_sentry(settings.sentry_dsn, environment=settings.environment)
        return SentryErrorReporter()
    return LoggingErrorReporter()


def _default_cache(
    settings: StackforgeSettings, registry: CircuitBreakerRegistry, reporter: ErrorReporter
) -> ResilientCache:
    client = None
    if settings.redis_url:
        from stackforge.adapters.redis import RedisCacheClient

        client = RedisCacheClient(settings.redis_url)
    else:
        logger.warning("cache.not_configured reason=no_redis_url")
    return ResilientCache(
        client, registry, reporter=reporter, max_connect_attempts=settings.cache_connect_attempts
    )


def create_app(
    settings: StackforgeSettings | None = None,
    *,
    registry: CircuitBreakerRegistry | None = None,
    cache: ResilientCache | None = None,
    reporter: ErrorReporter | None = None,
    metrics: Metrics | None = None,
    database: Any | None = None,
) -> Any:
    """Build the FastAPI application.

    Collaborators not passed in are created from *settings*: a Redis-backed
    cache when ``redis_url`` is set, a motor database when ``mongo_url`` is
    set and a Sentry reporter when ``sentry_dsn`` is set.
    """
    _require_fastapi()
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    settings = settings if settings is not None else StackforgeSettings()
    reporter = reporter if reporter is not None else _default_reporter(settings)
    registry = registry if registry is not None else CircuitBreakerRegistry()
    cache = cache if cache is not None else _default_cache(settings, registry, reporter)
    metrics = metrics if metrics is not None else NoopMetrics()
    if database is None and settings.mongo_url:
        database = connect_database(settings.mongo_url)

    pipeline = ArchivePipeline(
        settings.templates_root,
        cache,
        metrics=metrics,
        ttl_seconds=settings.archive_cache_ttl_seconds,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        connected = await cache.connect()
        logger.info("app.started cache_available=%s templates_root=%s", connected, settings.templates_root)
        try:
            yield
        finally:
            await cache.close()
            client = getattr(database, "client", None)
            if client is not None:
                client.close()
            logger.info("app.stopped")

    app = FastAPI(title="stackforge", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.cache = cache
    app.state.reporter = reporter
    app.state.database = database
    app.state.data_access = ResilientDataAccess(registry, reporter)
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    FastAPIExceptionMapper(reporter).register(app)

    async def cache_available() -> bool:
        return cache.is_available()

    app.include_router(StackRouter())
    app.include_router(FastAPIHealthRouter(readiness_checks=[cache_available], registry=registry))
    return app


def build_app() -> Any:
    """Load settings from the environment, configure logging and build the app."""
    settings = load_settings()
    JsonLoggerFactory.configure(level=settings.log_level, json_output=settings.json_logs)
    return create_app(settings)


__all__ = ["build_app", "create_app"]
