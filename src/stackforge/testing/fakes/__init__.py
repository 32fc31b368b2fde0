"""Testing fakes – in-memory doubles for the cache, store, reporter and metrics ports."""
from stackforge.kernel.time import ManualClock
from stackforge.testing.fakes.cache import InMemoryCacheClient
from stackforge.testing.fakes.collection import FakeCollection
from stackforge.testing.fakes.metrics import FakeMetricsRegistry
from stackforge.testing.fakes.reporter import RecordingErrorReporter

__all__ = [
    "FakeCollection",
    "FakeMetricsRegistry",
    "InMemoryCacheClient",
    "ManualClock",
    "RecordingErrorReporter",
]
