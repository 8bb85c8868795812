"""
Photo API Routes

- GET /api/photo?url=... - Photo of the representative h-card of a page
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from cache import combine, response_headers
from context import ServiceContext, get_context
from errors import TransportError
from hcard import get_hcard

from .service import get_photo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photo", tags=["Photo"])


@router.get("")
async def serve_photo(
    url: Optional[str] = Query(None, description="URL of the page"),
    ctx: ServiceContext = Depends(get_context),
):
    """
    Photo of a page's representative h-card.

    The response may be cached by clients only as long as both the h-card
    and the photo itself may be.

    Example:
        GET /api/photo?url=https://example.com/
    """
    if not url:
        raise HTTPException(status_code=400, detail="no URL specified")

    card, card_decision = await get_hcard(ctx, url)
    if not card.photo_url:
        raise HTTPException(status_code=404, detail="no photo")

    try:
        photo = await get_photo(ctx, card.photo_url)
    except TransportError as e:
        logger.error(f"[Photo] {e}")
        raise HTTPException(status_code=404, detail=str(e))

    headers = response_headers(combine(card_decision, photo.decision))
    if not headers:
        headers = {"Cache-Control": "no-cache"}
    headers["Access-Control-Allow-Origin"] = "*"
    if photo.last_modified:
        headers["Last-Modified"] = photo.last_modified

    return Response(content=photo.content, media_type=photo.content_type, headers=headers)
