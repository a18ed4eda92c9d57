"""
Preview FastAPI application.

Entry point for the page server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import config
from backend.routes import pages as pages_routes
from backend.routes import preview as preview_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Snapshots are read per request and nothing is pooled, so startup only
    records which bucket the store writes to.
    """
    logger.info(
        "Preview server starting (environment=%s, bucket=%s)",
        config.settings.ENVIRONMENT,
        config.settings.R2_SNAPSHOT_BUCKET,
    )
    yield
    logger.info("Preview server stopped")


app = FastAPI(
    title="Preview",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(preview_routes.router)
app.include_router(pages_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
