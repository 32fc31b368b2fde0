"""Resilience – cache facade, tagged values and the cache-aside policy."""
from stackforge.resilience.cache.values import Binary, CacheValue, Json, Text, decode_envelope, encode_envelope, tag
from stackforge.resilience.cache.facade import CACHE_BREAKER_POLICY, CacheClient, ResilientCache
from stackforge.resilience.cache.aside import CacheAsidePolicy, cache_aside

__all__ = [
    "CACHE_BREAKER_POLICY",
    "Binary",
    "CacheAsidePolicy",
    "CacheClient",
    "CacheValue",
    "Json",
    "ResilientCache",
    "Text",
    "cache_aside",
    "decode_envelope",
    "encode_envelope",
    "tag",
]
