"""
Application Entry Point

Endpoints:
- GET /api/hcard?url=... - Representative h-card of a page
- GET /api/photo?url=... - Photo of that h-card
- GET /api/og?url=...    - OpenGraph information of a page
- GET /api/health        - Health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI

import config
from context import ServiceContext, build_context, get_context
from hcard import router as hcard_router
from opengraph import router as opengraph_router
from photo import router as photo_router

logger = logging.getLogger(__name__)


def create_app(context: Optional[ServiceContext] = None) -> FastAPI:
    """
    Build the application.

    Args:
        context: Shared resources; built from the environment on startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = context is None
        app.state.context = build_context() if owned else context
        logger.info(f"[App] Started with {app.state.context.cache.kind} cache")
        try:
            yield
        finally:
            if owned:
                await app.state.context.aclose()

    app = FastAPI(title="pagecard", lifespan=lifespan)
    if context is not None:
        app.state.context = context

    app.include_router(hcard_router)
    app.include_router(photo_router)
    app.include_router(opengraph_router)

    @app.get("/api/health")
    async def health_check(ctx: ServiceContext = Depends(get_context)):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "cache": ctx.cache.kind,
            "timestamp": datetime.now().isoformat(),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(), host="0.0.0.0", port=config.PORT)
