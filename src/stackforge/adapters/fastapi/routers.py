"""FastAPI adapter – archive and health routers."""

from typing import Any, AsyncIterator, Awaitable, Callable

from stackforge.resilience.circuit_breaker import CircuitBreakerRegistry


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'fastapi' to use the FastAPI adapter") from exc


ReadinessCheck = Callable[[], Awaitable[bool]]


async def _primed(body: AsyncIterator[bytes]) -> AsyncIterator[bytes]:
    """Pull the first chunk now so setup failures surface before headers go out."""
    try:
        first = await anext(body)
    except StopAsyncIteration:
        first = b""

    async def stream() -> AsyncIterator[bytes]:
        if first:
            yield first
        async for chunk in body:
            yield chunk

    return stream()


def StackRouter(path: str = "/generate", tags: list[str] | None = None) -> Any:
    """Return the archive download router.

    ``GET {path}?frontend=<id>&backend=<id>`` streams ``<frontend>-<backend>.zip``
    using the :class:`~stackforge.application.archive.ArchivePipeline` found
    on ``app.state.pipeline``. Rejected combinations surface as
    :class:`~stackforge.kernel.errors.StackRequestError` for the exception
    mapper to render.
    """
    _require_fastapi()
    from fastapi import APIRouter, Query, Request
    from fastapi.responses import StreamingResponse

    router = APIRouter(tags=tags or ["stacks"])

    @router.get(path, response_class=StreamingResponse)
    async def generate(
        request: Request,
        frontend: str = Query(default="", description="Frontend framework id"),
        backend: str = Query(default="", description="Backend framework id"),
    ) -> Any:
        archive = await request.app.state.pipeline.generate(frontend, backend)
        body = await _primed(archive.body)
        return StreamingResponse(
            body,
            media_type="application/zip",
            headers={"Content-Disposition": archive.headers["Content-Disposition"]},
        )

    @router.get("/ping")
    async def ping() -> dict[str, str]:
        return {"message": "pong"}

    return router


def FastAPIHealthRouter(
    path: str = "/health",
    readiness_checks: list[ReadinessCheck] | None = None,
    registry: CircuitBreakerRegistry | None = None,
    tags: list[str] | None = None,
) -> Any:
    """Return liveness, readiness and circuit-breaker health routes.

    Parameters
    ----------
    path:
        Base path prefix. Liveness is at ``{path}/live``, readiness at
        ``{path}/ready`` and breaker states at ``{path}/circuits``.
    readiness_checks:
        Async callables returning ``bool``. A failing check marks the
        service ``degraded`` (HTTP 503) without taking it out of service
        in the process itself.
    registry:
        Registry whose :meth:`get_health` backs ``{path}/circuits``; the
        route is omitted when no registry is given.
    """
    _require_fastapi()
    from fastapi import APIRouter
    from fastapi.responses import JSONResponse

    router = APIRouter(tags=tags or ["ops"])
    checks = readiness_checks or []

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(f"{path}/ready")
    async def readiness() -> Any:
        results: dict[str, bool] = {}
        for check in checks:
            name = getattr(check, "__name__", repr(check))
            try:
                results[name] = bool(await check())
            except Exception:  # noqa: BLE001
                results[name] = False
        all_ok = all(results.values())
        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={"status": "ok" if all_ok else "degraded", "checks": results},
        )

    if registry is not None:

        @router.get(f"{path}/circuits")
        async def circuits() -> dict[str, Any]:
            return {"circuits": registry.get_health()}

    return router


__all__ = ["FastAPIHealthRouter", "ReadinessCheck", "StackRouter"]
