"""
OpenGraph API Routes

- GET /api/og?url=... - OpenGraph information of a page
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from cache import response_headers
from context import ServiceContext, get_context

from .service import get_opengraph

router = APIRouter(prefix="/api/og", tags=["OpenGraph"])


@router.get("")
async def serve_opengraph(
    url: Optional[str] = Query(None, description="URL of the page"),
    ctx: ServiceContext = Depends(get_context),
):
    """OpenGraph title, image and description of a page as JSON."""
    if not url:
        raise HTTPException(status_code=400, detail="no URL specified")

    og, decision = await get_opengraph(ctx, url)
    headers = {**response_headers(decision), "Access-Control-Allow-Origin": "*"}

    if og is None:
        raise HTTPException(status_code=404, detail="no OpenGraph information at URL", headers=headers)

    return Response(content=og.to_json(), media_type="application/json", headers=headers)
