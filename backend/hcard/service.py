"""
h-card Service

Fetches a page, resolves its representative h-card and caches the result
under the "hcard" namespace. A page without a representative h-card, or
one that cannot be fetched, yields an empty card which is cached like any
other result.
"""

import logging
from typing import Tuple

from cache import CacheabilityDecision, Namespace, cache_key, decide, get_cached
from cache.orchestrator import store_result
from context import ServiceContext
from errors import ParseError, TransportError
from transport import fetch

from .models import IdentityCard
from .parsing import ParsedPage, parse_page
from .resolver import card_from_item, resolve

logger = logging.getLogger(__name__)


async def fetch_hcard(ctx: ServiceContext, link: str) -> Tuple[IdentityCard, CacheabilityDecision]:
    """
    Fetch a page and resolve its representative h-card.

    Returns:
        Tuple of (card, decision); the card is empty when none was found

    Raises:
        TransportError: if the page cannot be fetched
    """
    page = await fetch(ctx.http_client, link)
    decision = decide(page.headers)

    try:
        parsed = parse_page(page.body, page.url)
    except ParseError as e:
        logger.warning(f"[HCard] {e}")
        parsed = ParsedPage()

    item = resolve(parsed.all_items(), page.url, parsed.rels.get("me", []))
    if item is None:
        logger.info(f"[HCard] No representative h-card at {page.url[:80]}")
        return IdentityCard(), decision

    return card_from_item(item, source=page.url), decision


async def produce_hcard(ctx: ServiceContext, link: str) -> Tuple[bytes, CacheabilityDecision]:
    """Serialized card for link; transport failures give an empty card with the default cache window."""
    try:
        card, decision = await fetch_hcard(ctx, link)
    except TransportError as e:
        logger.warning(f"[HCard] {e}")
        card, decision = IdentityCard(), decide({})
    return card.to_json(), decision


async def get_hcard(ctx: ServiceContext, link: str) -> Tuple[IdentityCard, CacheabilityDecision]:
    """
    Get the representative h-card for link through the cache.

    Returns:
        Tuple of (card, decision)
    """
    result = await get_cached(
        ctx.cache,
        Namespace.HCARD,
        link,
        lambda url: produce_hcard(ctx, url),
    )

    try:
        return IdentityCard.from_json(result.content), result.decision
    except ValueError as e:
        if not result.from_cache:
            raise
        logger.warning(f"[HCard] Can't parse cached value for {link[:80]}: {e}")

    content, decision = await produce_hcard(ctx, link)
    await store_result(ctx.cache, cache_key(Namespace.HCARD, link), content, decision)
    return IdentityCard.from_json(content), decision
