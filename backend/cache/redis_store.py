"""
Redis Store Implementation

Shared cache backend on top of redis.asyncio.

Values are stored base64-encoded, with the entry's absolute expiry set as
the key's native expiry (SET ... EXAT). Lookups re-check the expiry on the
client side to tolerate clock skew between this process and Redis.
"""

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .base import CacheStore

logger = logging.getLogger(__name__)


class RedisStore(CacheStore):
    """Cache backend storing base64 content in Redis with server-side expiry."""

    kind = "redis"

    def __init__(self, client: Redis):
        self._client = client

    @classmethod
    def from_url(cls, redis_url: str, socket_timeout: float = 5.0) -> "RedisStore":
        """Create a store with its own connection pool."""
        client = Redis.from_url(
            redis_url,
            decode_responses=False,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        logger.info(f"[RedisStore] Using Redis cache at {redis_url}")
        return cls(client)

    async def get(self, key: str) -> Optional[Tuple[bytes, datetime]]:
        try:
            value = await self._client.get(key)
            if value is None:
                return None
            expire_unix = await self._client.expiretime(key)
        except RedisError as e:
            logger.warning(f"[RedisStore] Read failed for {key[:80]}: {e}")
            return None

        # -1: no expiry set, -2: key vanished between the two calls
        now = datetime.now(timezone.utc)
        expires_at = datetime.fromtimestamp(max(expire_unix, 0), tz=timezone.utc)
        if expire_unix < 0 or expires_at <= now:
            await self._delete(key)
            return None

        try:
            content = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"[RedisStore] Corrupted entry for {key[:80]}: {e}")
            return None

        return content, expires_at

    async def set(self, key: str, content: bytes, expires_at: datetime) -> None:
        value = base64.b64encode(content)
        try:
            await self._client.set(key, value, exat=int(expires_at.timestamp()))
        except RedisError as e:
            logger.warning(f"[RedisStore] Write failed for {key[:80]}: {e}")

    async def _delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            logger.warning(f"[RedisStore] Delete failed for {key[:80]}: {e}")

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except Exception as e:
            logger.warning(f"[RedisStore] Error closing Redis client: {e}")
