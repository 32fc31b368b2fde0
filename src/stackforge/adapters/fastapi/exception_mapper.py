"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

import logging
from typing import Any, Callable

from stackforge.kernel.errors import ArchiveStreamingError, InfrastructureError, StackRequestError
from stackforge.observability.errors import ErrorReporter, LoggingErrorReporter

logger = logging.getLogger(__name__)


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'fastapi' to use the FastAPI adapter") from exc


class FastAPIExceptionMapper:
    """Register stackforge error → HTTP response mappings on a FastAPI app.

    Mappings
    --------
    ``StackRequestError``     → its own ``status_code`` (400 / 404), body
                                from :meth:`StackRequestError.to_problem`
    ``ArchiveStreamingError`` → 500 ``{"error": "Server error", ...}``
    ``InfrastructureError``   → 503 ``{"error": "Service unavailable", ...}``

    Starlette resolves handlers along the exception MRO, so the archive
    mapping wins over the generic infrastructure one.
    """

    def __init__(self, reporter: ErrorReporter | None = None) -> None:
        _require_fastapi()
        self._reporter = reporter if reporter is not None else LoggingErrorReporter()

    def register(self, app: Any) -> None:
        app.add_exception_handler(StackRequestError, self._stack_request_handler())
        app.add_exception_handler(ArchiveStreamingError, self._archive_handler())
        app.add_exception_handler(InfrastructureError, self._infrastructure_handler())

    def _stack_request_handler(self) -> Callable[[Any, Any], Any]:
        from fastapi.responses import JSONResponse

        def handler(request: Any, exc: StackRequestError) -> Any:  # noqa: ARG001
            logger.info("http.stack_rejected code=%s status=%d", exc.code, exc.status_code)
            return JSONResponse(status_code=exc.status_code, content=exc.to_problem())

        return handler

    def _archive_handler(self) -> Callable[[Any, Any], Any]:
        from fastapi.responses import JSONResponse

        def handler(request: Any, exc: ArchiveStreamingError) -> Any:
            self._reporter.report_error(exc, {"path": request.url.path, "stack": exc.stack_id})
            return JSONResponse(
                status_code=500,
                content={
                    "statusCode": 500,
                    "error": "Server error",
                    "message": "An error occurred while generating the stack",
                },
            )

        return handler

    def _infrastructure_handler(self) -> Callable[[Any, Any], Any]:
        from fastapi.responses import JSONResponse

        def handler(request: Any, exc: InfrastructureError) -> Any:
            logger.error("http.dependency_unavailable path=%s code=%s", request.url.path, exc.code)
            return JSONResponse(
                status_code=503,
                content={"statusCode": 503, "error": "Service unavailable", "message": exc.message},
            )

        return handler


__all__ = ["FastAPIExceptionMapper"]
