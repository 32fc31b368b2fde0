"""Application cache – CacheKey builder."""
from __future__ import annotations

__all__ = ["CacheKey"]


class CacheKey:
    """Factory for cache key strings."""

    @staticmethod
    def for_stack(stack_id: str) -> str:
        return f"stack:{stack_id}"
