"""
Photo Service

Fetches the photo of a representative h-card and caches it under the
"photo" namespace, together with the origin's Content-Type and
Last-Modified so a cache hit is served the same way as the first fetch.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from cache import CacheabilityDecision, Namespace, cache_key, decide, get_cached
from cache.orchestrator import store_result
from context import ServiceContext
from transport import fetch

logger = logging.getLogger(__name__)

# Guess table for photos the origin mislabels
EXTENSION_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".avif": "image/avif",
}

DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class PhotoResult:
    """Photo bytes with the cacheability they were served with."""
    content: bytes
    content_type: str
    decision: CacheabilityDecision
    last_modified: Optional[str] = None


class CachedPhoto(BaseModel):
    """
    Cache entry data structure for a photo
    照片缓存条目
    """
    data: str                        # base64 of the photo bytes
    content_type: str
    last_modified: str = ""

    @classmethod
    def from_photo(cls, content: bytes, content_type: str, last_modified: Optional[str]) -> "CachedPhoto":
        return cls(
            data=base64.b64encode(content).decode("ascii"),
            content_type=content_type,
            last_modified=last_modified or "",
        )

    def to_json(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_json(cls, content: bytes) -> "CachedPhoto":
        return cls.model_validate_json(content)

    def photo(self, decision: CacheabilityDecision) -> PhotoResult:
        return PhotoResult(
            content=base64.b64decode(self.data, validate=True),
            content_type=self.content_type,
            decision=decision,
            last_modified=self.last_modified or None,
        )


def guess_content_type(url: str, header_value: str = "") -> str:
    """
    Content type of a photo.

    Uses the origin's Content-Type when it names an image, otherwise guesses
    from the URL's extension.
    """
    content_type = header_value.split(";")[0].strip().lower()
    if content_type.startswith("image/"):
        return content_type

    path = url.split("?")[0].lower()
    for ext, mime in EXTENSION_CONTENT_TYPES.items():
        if path.endswith(ext):
            return mime

    if content_type and content_type not in ("application/octet-stream", "binary/octet-stream"):
        logger.warning(f"[Photo] Non-image content-type: {content_type} for {url[:60]}")
    return DEFAULT_CONTENT_TYPE


async def produce_photo(ctx: ServiceContext, link: str):
    """
    Serialized photo entry for link.

    Raises:
        TransportError: if the photo cannot be fetched
    """
    page = await fetch(ctx.http_client, link)
    logger.info(f"[Photo] Fetched: {link[:60]} ({len(page.body)} bytes)")
    entry = CachedPhoto.from_photo(
        page.body,
        guess_content_type(link, page.headers.get("content-type", "")),
        page.headers.get("last-modified"),
    )
    return entry.to_json(), decide(page.headers)


async def get_photo(ctx: ServiceContext, link: str) -> PhotoResult:
    """
    Get a photo through the cache.

    Raises:
        TransportError: if the photo cannot be fetched
    """
    result = await get_cached(
        ctx.cache,
        Namespace.PHOTO,
        link,
        lambda url: produce_photo(ctx, url),
    )

    try:
        return CachedPhoto.from_json(result.content).photo(result.decision)
    except ValueError as e:
        if not result.from_cache:
            raise
        logger.warning(f"[Photo] Can't parse cached value for {link[:80]}: {e}")

    content, decision = await produce_photo(ctx, link)
    await store_result(ctx.cache, cache_key(Namespace.PHOTO, link), content, decision)
    return CachedPhoto.from_json(content).photo(decision)
