"""
OpenGraph Module

Serves the OpenGraph title, image and description of a page through the cache.
"""

from .routes import router
from .service import OpenGraph, get_opengraph

__all__ = ["router", "OpenGraph", "get_opengraph"]
