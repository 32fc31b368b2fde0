"""Resilience – backoff strategies for reconnect loops."""
from stackforge.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff

__all__ = ["BackoffStrategy", "ExponentialBackoff"]
