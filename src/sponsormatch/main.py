# src/sponsormatch/main.py
"""Main entry point for the SponsorMatch application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from sponsormatch.api.v1 import (
    auth_router,
    feed_router,
    matches_router,
    offers_router,
    profiles_router,
    swipes_router,
)
from sponsormatch.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="SponsorMatch API",
    description="Swipe-to-match connector between athletes and sponsors",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")
app.include_router(swipes_router, prefix="/api/v1")
app.include_router(matches_router, prefix="/api/v1")
app.include_router(offers_router, prefix="/api/v1")

if settings.storage_backend == "local":
    # Serves uploaded profile images; the directory is created on first upload.
    app.mount(
        "/media",
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "SponsorMatch API",
        "version": settings.app_version,
        "description": "Swipe-to-match connector between athletes and sponsors",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sponsormatch.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
