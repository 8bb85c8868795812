"""
Representative h-card resolution

Picks the one h-card on a page that describes the page's owner, following
https://microformats.org/wiki/representative-h-card-parsing:

1. uid == url == page URL
2. url matches one of the page's rel=me links
3. the only h-card on the page, with url == page URL

The checks run in this order and the first match wins.
"""

import logging
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from .models import HCARD_TYPE, IdentityCard, StructuredItem

logger = logging.getLogger(__name__)


def match_urls(a: str, b: str) -> bool:
    """Compare two URLs by their parsed, re-serialized form. Unparsable URLs never match."""
    try:
        return urlunsplit(urlsplit(a)) == urlunsplit(urlsplit(b))
    except ValueError:
        return False


def find_hcards(items: Iterable[StructuredItem]) -> List[StructuredItem]:
    return [item for item in items if item.is_a(HCARD_TYPE)]


def _is_self_identified(card: StructuredItem, page_url: str) -> bool:
    uid = card.string("uid")
    if not uid:
        return False
    url = card.string("url")
    return match_urls(uid, url) and match_urls(url, page_url)


def resolve(
    items: Iterable[StructuredItem],
    page_url: str,
    rel_me: Sequence[str] = (),
) -> Optional[StructuredItem]:
    """
    Find the representative h-card among items.

    Args:
        items: Every structured item on the page, in document order
        page_url: Final URL of the page
        rel_me: Targets of the page's rel=me links, in document order

    Returns:
        The representative item, or None
    """
    hcards = find_hcards(items)

    for card in hcards:
        if _is_self_identified(card, page_url):
            logger.debug(f"[HCard] uid/url self-match on {page_url[:80]}")
            return card

    for card in hcards:
        url = card.string("url")
        for me in rel_me:
            if match_urls(url, me):
                logger.debug(f"[HCard] rel=me match on {page_url[:80]}")
                return card

    if len(hcards) == 1 and match_urls(hcards[0].string("url"), page_url):
        logger.debug(f"[HCard] single h-card on {page_url[:80]}")
        return hcards[0]

    return None


def card_from_item(item: StructuredItem, source: str) -> IdentityCard:
    """Map a representative item onto an IdentityCard."""
    return IdentityCard(
        source=source,
        display_name=item.string("name"),
        photo_url=item.string("photo"),
        nickname=item.string("nickname"),
        note=item.string("note"),
    )
