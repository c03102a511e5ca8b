"""
ytdlmeta HTTP application.

Exposes the local metadata and image providers over a small JSON API.
"""

import logging

from fastapi import FastAPI

from ytdlmeta import __version__

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="ytdlmeta",
        description="Local metadata and thumbnails from yt-dlp sidecar files",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    from ytdlmeta.api import api_router
    app.include_router(api_router)

    return app


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    from ytdlmeta.config import get_config
    from ytdlmeta.utils.logging_setup import setup_logging_from_config

    setup_logging_from_config()
    server = get_config().server
    logger.info(f"Starting ytdlmeta {__version__} on {server.host}:{server.port}")
    uvicorn.run(create_app(), host=server.host, port=server.port)
