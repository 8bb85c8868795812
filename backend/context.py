"""
Service Context

The cache store and the outbound HTTP client are created once at startup
and passed explicitly to every resource service.
"""

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

import config
from cache import CacheStore, MemoryStore, RedisStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    """Shared resources for request handling."""
    cache: CacheStore
    http_client: httpx.AsyncClient

    async def aclose(self) -> None:
        await self.http_client.aclose()
        await self.cache.close()


def build_cache_store(redis_url: str = "") -> CacheStore:
    """Select the cache backend: Redis when a URL is configured, memory otherwise."""
    if redis_url:
        return RedisStore.from_url(redis_url, socket_timeout=config.REDIS_SOCKET_TIMEOUT_SECONDS)
    logger.info("[Context] Using in-memory cache")
    return MemoryStore()


def build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=config.HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
        headers={"User-Agent": config.USER_AGENT},
    )


def build_context() -> ServiceContext:
    return ServiceContext(
        cache=build_cache_store(config.REDIS_URL),
        http_client=build_http_client(),
    )


def get_context(request: Request) -> ServiceContext:
    """FastAPI dependency returning the application's context."""
    return request.app.state.context
