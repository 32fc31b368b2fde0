"""Application cache – key builders."""
from stackforge.application.cache.keys import CacheKey

__all__ = ["CacheKey"]
