"""Sentry adapter – SentryErrorReporter.

Requires the ``sentry`` extra::

    pip install "stackforge[sentry]"
"""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _require_sentry() -> Any:
    try:
        import sentry_sdk
        return sentry_sdk
    except ImportError as exc:
        raise ImportError("Install 'stackforge[sentry]' to use the Sentry adapter") from exc


def init_sentry(dsn: str, environment: str = "production", traces_sample_rate: float = 0.0) -> bool:
    """Initialise the Sentry SDK; returns ``False`` when *dsn* is empty."""
    if not dsn:
        logger.info("sentry.disabled reason=no_dsn")
        return False
    sentry_sdk = _require_sentry()
    sentry_sdk.init(dsn=dsn, environment=environment, traces_sample_rate=traces_sample_rate)
    logger.info("sentry.initialized environment=%s", environment)
    return True


class SentryErrorReporter:
    """Forward reported errors to Sentry with *context* attached as extras."""

    def __init__(self, sdk: Any | None = None) -> None:
        self._sdk = sdk or _require_sentry()

    def report_error(self, error: BaseException, context: dict[str, Any] | None = None) -> None:
        try:
            with self._sdk.new_scope() as scope:
                for key, value in (context or {}).items():
                    scope.set_extra(key, value)
                self._sdk.capture_exception(error)
        except Exception:  # noqa: BLE001 – a reporter must not raise
            logger.warning("sentry.capture_failed error=%r", error, exc_info=True)


__all__ = ["SentryErrorReporter", "init_sentry"]
