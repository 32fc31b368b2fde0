"""Kernel time – Clock port + implementations."""
from stackforge.kernel.time.clock import Clock, ManualClock, SystemClock

__all__ = ["Clock", "ManualClock", "SystemClock"]
