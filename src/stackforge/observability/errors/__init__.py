"""Observability – error reporting sink."""
from stackforge.observability.errors.reporter import ErrorReporter, LoggingErrorReporter

__all__ = ["ErrorReporter", "LoggingErrorReporter"]
