"""Kernel value types — public re-export surface.

Modules:
  result.py — Ok, Err, Result, Degraded, DegradedReason
"""

from stackforge.kernel.types.result import Degraded, DegradedReason, Err, Ok, Result

__all__ = ["Degraded", "DegradedReason", "Err", "Ok", "Result"]
