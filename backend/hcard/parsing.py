"""
Microformats parsing

Adapter over mf2py: turns raw page bytes into StructuredItems plus the
page-level rel links.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import mf2py

from errors import ParseError
from .models import StructuredItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedPage:
    """Items and rel links found on a page."""
    items: Tuple[StructuredItem, ...] = ()
    rels: Dict[str, List[str]] = field(default_factory=dict)

    def all_items(self) -> List[StructuredItem]:
        """Every item on the page, nested ones included, in document order."""
        return [item for root in self.items for item in root.walk()]


def parse_page(body: bytes, base_url: str) -> ParsedPage:
    """
    Parse microformats from a document.

    Raises:
        ParseError: if the document cannot be parsed
    """
    try:
        data = mf2py.parse(doc=body, url=base_url)
    except Exception as e:
        raise ParseError(base_url, str(e)) from e

    items = tuple(StructuredItem.from_mf2(item) for item in data.get("items", []))
    rels = {name: list(links) for name, links in (data.get("rels") or {}).items()}
    logger.debug(f"[Parse] {len(items)} root items on {base_url[:80]}")
    return ParsedPage(items=items, rels=rels)
