"""
h-card API Routes

- GET /api/hcard?url=... - Representative h-card of a page
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from cache import response_headers
from context import ServiceContext, get_context

from .service import get_hcard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hcard", tags=["h-card"])


@router.get("")
async def serve_hcard(
    url: Optional[str] = Query(None, description="URL of the page"),
    ctx: ServiceContext = Depends(get_context),
):
    """
    Representative h-card of a page as JSON.

    Example:
        GET /api/hcard?url=https://example.com/
    """
    if not url:
        raise HTTPException(status_code=400, detail="no URL specified")

    card, decision = await get_hcard(ctx, url)
    headers = {**response_headers(decision), "Access-Control-Allow-Origin": "*"}

    if card.is_empty:
        raise HTTPException(
            status_code=404,
            detail="no representative h-card at URL",
            headers=headers,
        )

    return Response(content=card.to_json(), media_type="application/json", headers=headers)
