"""Testing support – in-memory fakes for stackforge's ports.

Usage::

    from stackforge.testing import InMemoryCacheClient, RecordingErrorReporter
"""

from stackforge.testing.fakes import (
    FakeCollection,
    FakeMetricsRegistry,
    InMemoryCacheClient,
    ManualClock,
    RecordingErrorReporter,
)

__all__ = [
    "FakeCollection",
    "FakeMetricsRegistry",
    "InMemoryCacheClient",
    "ManualClock",
    "RecordingErrorReporter",
]
