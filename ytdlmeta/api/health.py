"""Health check API endpoint for ytdlmeta"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from ytdlmeta import __version__

from ..media.images.probe import PillowImageProbe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


def check_image_formats() -> dict[str, Any]:
    """Check which image formats can be probed."""
    try:
        formats = sorted(PillowImageProbe().supported_input_formats)
    except Exception as e:
        logger.warning(f"Image format check failed: {e}")
        return {"status": "error", "error": str(e)}
    return {"status": "ok", "formats": formats}


@router.get("")
def health() -> dict[str, Any]:
    """Report service status."""
    images = check_image_formats()
    return {
        "status": "healthy" if images["status"] == "ok" else "degraded",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "images": images,
    }
