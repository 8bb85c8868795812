"""
Fetch-and-Cache Orchestrator

Serves a resource from the cache store when a fresh entry exists, and
otherwise produces it, writes it back when the origin allows caching, and
reports the cacheability of the result.

Concurrent misses for the same key each produce the resource and each
write it back; the last write wins.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Tuple

from .base import CacheStore, Namespace, cache_key
from .policy import CacheabilityDecision, format_http_date, response_headers

logger = logging.getLogger(__name__)

Producer = Callable[[str], Awaitable[Tuple[bytes, CacheabilityDecision]]]


@dataclass(frozen=True)
class CachedResult:
    """Serialized resource plus the cacheability it was served with."""
    content: bytes
    decision: CacheabilityDecision
    from_cache: bool = False

    @property
    def headers(self) -> Dict[str, str]:
        return response_headers(self.decision)


async def get_cached(
    store: CacheStore,
    namespace: Namespace,
    url: str,
    produce: Producer,
) -> CachedResult:
    """
    Get a resource through the cache.

    Args:
        store: Cache backend
        namespace: Resource kind, part of the cache key
        url: Subject URL, part of the cache key and passed to produce
        produce: Coroutine function returning (content, decision) for url

    Returns:
        CachedResult
    """
    key = cache_key(namespace, url)

    cached = await store.get(key)
    if cached is not None:
        content, expires_at = cached
        logger.debug(f"[Cache] Hit: {key[:80]}")
        return CachedResult(
            content=content,
            decision=CacheabilityDecision(cacheable=True, expires_at=expires_at),
            from_cache=True,
        )

    content, decision = await produce(url)
    await store_result(store, key, content, decision)
    return CachedResult(content=content, decision=decision)


async def store_result(
    store: CacheStore,
    key: str,
    content: bytes,
    decision: CacheabilityDecision,
) -> bool:
    """
    Write content to the store if the decision allows it.

    Returns:
        True if the content was written
    """
    if not decision.cacheable:
        logger.info(f"[Cache] Not cached: {key[:80]}")
        return False

    if decision.expires_at is None:
        logger.warning(f"[Cache] Not cached, origin expiry unknown: {key[:80]}")
        return False

    if decision.expires_at <= datetime.now(timezone.utc):
        logger.info(f"[Cache] Not cached, already stale: {key[:80]}")
        return False

    await store.set(key, content, decision.expires_at)
    logger.info(f"[Cache] {key[:80]} cached until {format_http_date(decision.expires_at)}")
    return True
