"""
Cache Module
缓存模块

Cacheability policy, cache store backends and the fetch-and-cache
orchestrator shared by every cached resource.
"""

from .base import CacheStore, Namespace, cache_key
from .memory_store import MemoryStore, CacheEntry
from .redis_store import RedisStore
from .policy import (
    CacheabilityDecision,
    NOT_CACHEABLE,
    decide,
    combine,
    response_headers,
)
from .orchestrator import CachedResult, get_cached

__all__ = [
    "CacheStore",
    "Namespace",
    "cache_key",
    "MemoryStore",
    "CacheEntry",
    "RedisStore",
    "CacheabilityDecision",
    "NOT_CACHEABLE",
    "decide",
    "combine",
    "response_headers",
    "CachedResult",
    "get_cached",
]
