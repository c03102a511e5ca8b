"""API routes for ytdlmeta"""

from fastapi import APIRouter

from .health import router as health_router
from .metadata import router as metadata_router

# Create the main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(metadata_router)

__all__ = ["api_router"]
