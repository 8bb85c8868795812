"""
h-card Module

Resolves the representative h-card of a page and serves it through the cache.
"""

from .models import IdentityCard, StructuredItem
from .resolver import resolve, card_from_item
from .service import get_hcard
from .routes import router

__all__ = ["IdentityCard", "StructuredItem", "resolve", "card_from_item", "get_hcard", "router"]
