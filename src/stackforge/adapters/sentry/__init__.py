"""Sentry adapter – ErrorReporter backed by sentry-sdk."""
from stackforge.adapters.sentry.reporter import SentryErrorReporter, init_sentry

__all__ = ["SentryErrorReporter", "init_sentry"]
