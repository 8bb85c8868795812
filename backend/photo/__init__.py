"""
Photo Module

Serves the photo of a page's representative h-card, with client cache
headers no looser than those of the h-card and of the photo.
"""

from .routes import router
from .service import get_photo, PhotoResult

__all__ = ["router", "get_photo", "PhotoResult"]
