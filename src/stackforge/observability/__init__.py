"""Observability – logging, error reporting, metrics."""

from stackforge.observability.errors import ErrorReporter, LoggingErrorReporter
from stackforge.observability.logging import JsonLoggerFactory, SensitiveFieldsFilter
from stackforge.observability.metrics import Counter, Metrics, NoopMetrics

__all__ = [
    "Counter",
    "ErrorReporter",
    "JsonLoggerFactory",
    "LoggingErrorReporter",
    "Metrics",
    "NoopMetrics",
    "SensitiveFieldsFilter",
]
