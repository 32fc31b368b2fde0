"""Observability – metrics ports."""
from stackforge.observability.metrics.ports import Counter, Metrics
from stackforge.observability.metrics.noop import NoopMetrics

__all__ = ["Counter", "Metrics", "NoopMetrics"]
