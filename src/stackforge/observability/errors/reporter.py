"""Observability – ErrorReporter port and the logging-backed default."""
from __future__ import annotations

import logging
from typing import Any, Protocol

from stackforge.kernel.errors import BaseError
from stackforge.observability.logging.filters import SensitiveFieldsFilter

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    """Port: fire-and-forget sink for unexpected errors.

    Implementations must never block and never raise back into the caller.
    """

    def report_error(self, error: BaseException, context: dict[str, Any] | None = None) -> None: ...


class LoggingErrorReporter:
    """Report errors as structured log records (the default sink)."""

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._filter = SensitiveFieldsFilter(sensitive_fields)

    def report_error(self, error: BaseException, context: dict[str, Any] | None = None) -> None:
        try:
            ctx = self._filter.redact_deep(dict(context or {}))
            payload = error.to_dict() if isinstance(error, BaseError) else repr(error)
            logger.error("error.reported error=%s context=%s", payload, ctx)
        except Exception:  # noqa: BLE001 – a reporter must not raise
            logger.debug("error.report_failed", exc_info=True)


__all__ = ["ErrorReporter", "LoggingErrorReporter"]
