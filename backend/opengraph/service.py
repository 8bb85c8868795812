"""
OpenGraph Service

Reads og:title, og:image and og:description from a page and caches them
under the "og" namespace. Pages without og:title, or that cannot be
fetched, are cached as having no OpenGraph information.
"""

import logging
from typing import Optional, Tuple

from bs4 import BeautifulSoup
from pydantic import BaseModel

from cache import CacheabilityDecision, Namespace, decide, get_cached
from context import ServiceContext
from errors import TransportError
from transport import fetch

logger = logging.getLogger(__name__)

EMPTY = b"{}"


class OpenGraph(BaseModel):
    """OpenGraph information of a page"""
    title: str
    image: str = ""
    description: str = ""

    def to_json(self) -> bytes:
        return self.model_dump_json(exclude_defaults=True).encode("utf-8")


def _meta_property(soup: BeautifulSoup, name: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"property": name})
    if tag is None:
        return None
    return tag.get("content")


def opengraph_from_html(body: bytes) -> Optional[OpenGraph]:
    """Extract OpenGraph information, or None when the page has no og:title."""
    soup = BeautifulSoup(body, "html.parser")

    title = _meta_property(soup, "og:title")
    if title is None:
        return None

    return OpenGraph(
        title=title,
        image=_meta_property(soup, "og:image") or "",
        description=_meta_property(soup, "og:description") or "",
    )


async def produce_opengraph(ctx: ServiceContext, link: str) -> Tuple[bytes, CacheabilityDecision]:
    try:
        page = await fetch(ctx.http_client, link)
    except TransportError as e:
        logger.warning(f"[OpenGraph] {e}")
        return EMPTY, decide({})

    og = opengraph_from_html(page.body)
    if og is None:
        logger.info(f"[OpenGraph] No og:title at {page.url[:80]}")
        return EMPTY, decide(page.headers)
    return og.to_json(), decide(page.headers)


async def get_opengraph(ctx: ServiceContext, link: str) -> Tuple[Optional[OpenGraph], CacheabilityDecision]:
    """
    Get OpenGraph information for link through the cache.

    Returns:
        Tuple of (OpenGraph or None, decision)
    """
    result = await get_cached(
        ctx.cache,
        Namespace.OPENGRAPH,
        link,
        lambda url: produce_opengraph(ctx, url),
    )
    if result.content == EMPTY:
        return None, result.decision

    try:
        return OpenGraph.model_validate_json(result.content), result.decision
    except ValueError as e:
        logger.warning(f"[OpenGraph] Can't parse cached value for {link[:80]}: {e}")
        return None, result.decision
