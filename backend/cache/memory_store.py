"""
Memory Store Implementation
内存存储实现

Thread-safe in-process cache backend.

Features:
- Thread-safe operations with Lock
- Read-time expiration: an expired entry is removed on its next lookup
- Last writer wins on set

There is no background sweep; an expired entry stays in memory until the
same key is requested again. Nothing survives a restart.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional, Tuple

from .base import CacheStore

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """
    Cache entry data structure
    缓存条目数据结构
    """
    content: bytes                   # Cached payload
    expires_at: datetime             # Absolute expiry (aware, UTC)

    @property
    def is_expired(self) -> bool:
        """Check if this entry has expired"""
        return self.expires_at <= datetime.now(timezone.utc)


class MemoryStore(CacheStore):
    """
    Thread-safe in-memory storage
    线程安全的内存存储

    Readers and writers share one plain Lock rather than a reader/writer
    lock: every critical section is a single dict lookup, delete or
    assignment with no I/O, and handlers run on one event loop thread, so
    a shared read mode would not let any more work run at once.
    """

    kind = "memory"

    def __init__(self):
        self._store: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    async def get(self, key: str) -> Optional[Tuple[bytes, datetime]]:
        """
        Get cached content by key
        根据 key 获取缓存内容

        Returns:
            Tuple of (content, expires_at) if found and not expired, None otherwise
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired:
                del self._store[key]
                logger.debug(f"[MemoryStore] Evicted expired entry: {key[:80]}")
                return None
            return entry.content, entry.expires_at

    async def set(self, key: str, content: bytes, expires_at: datetime) -> None:
        """
        Store content until expires_at
        存储缓存内容
        """
        with self._lock:
            self._store[key] = CacheEntry(content=content, expires_at=expires_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
