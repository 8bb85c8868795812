"""
Cache Store Interface
缓存存储接口

Both backends share one capability set: get and set of byte content with
an absolute expiry. Backend errors never reach the caller; a failed get is
a miss and a failed set is skipped.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Namespace(str, Enum):
    """
    Logical resource kinds sharing one cache key space
    """
    HCARD = "hcard"
    PHOTO = "photo"
    OPENGRAPH = "og"


def cache_key(namespace: Namespace, url: str) -> str:
    """Build the cache key for a resource, e.g. "hcard=https://example.com/"."""
    return f"{namespace.value}={url}"


class CacheStore(ABC):
    """Key/value store of byte content with per-entry expiry."""

    #: Short backend name, reported by the health endpoint
    kind: str = "abstract"

    @abstractmethod
    async def get(self, key: str) -> Optional[Tuple[bytes, datetime]]:
        """
        Look up a cached entry.

        Returns:
            Tuple of (content, expires_at) if cached and fresh, None otherwise.
        """

    @abstractmethod
    async def set(self, key: str, content: bytes, expires_at: datetime) -> None:
        """Store content under key until expires_at, replacing any previous value."""

    async def close(self) -> None:
        """Release backend resources."""
