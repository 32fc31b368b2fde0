"""Redis adapter – string cache client behind the resilient cache facade."""
from stackforge.adapters.redis.cache import RedisCacheClient

__all__ = ["RedisCacheClient"]
