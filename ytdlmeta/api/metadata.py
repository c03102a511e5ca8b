"""Local metadata and image API endpoints"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import get_config
from ..media.images.local_images import LocalImageProvider
from ..media.items import MediaType, create_item, supports
from ..media.providers.base import SidecarParseError
from ..media.providers.youtube_local import YoutubeLocalProvider
from .schemas import ChangedResponse, ImageResponse, ImagesResponse, MetadataResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metadata"])


@lru_cache
def get_metadata_provider() -> YoutubeLocalProvider:
    return YoutubeLocalProvider.from_config()


@lru_cache
def get_image_provider() -> LocalImageProvider:
    return LocalImageProvider()


@router.get("/metadata", response_model=MetadataResponse)
def get_metadata(
    path: str = Query(..., description="Path of the media file"),
    provider: YoutubeLocalProvider = Depends(get_metadata_provider),
) -> MetadataResponse:
    """Read the info.json sidecar for a media file.

    Args:
        path: Media file path
        provider: Metadata provider

    Returns:
        MetadataResponse: has_metadata is false when no usable sidecar exists;
            error says why when the sidecar exists but is corrupt
    """
    try:
        result = provider.get_metadata(path)
    except SidecarParseError as e:
        logger.warning(f"Failed to read metadata for {path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {e.field_name} in sidecar: {e.value!r}",
        )
    return MetadataResponse.from_result(result)


@router.get("/metadata/changed", response_model=ChangedResponse)
def get_metadata_changed(
    path: str = Query(..., description="Path of the media file"),
    last_saved: Optional[datetime] = Query(None, description="When the item was last saved"),
    provider: YoutubeLocalProvider = Depends(get_metadata_provider),
) -> ChangedResponse:
    """Check whether the sidecar is newer than the item."""
    item = create_item(MediaType.MOVIE, path)
    item.date_last_saved = last_saved
    return ChangedResponse(
        changed=provider.has_changed(item),
        sidecar_path=str(provider.get_info_json_path(path)),
    )


@router.get("/images", response_model=ImagesResponse)
def get_images(
    path: str = Query(..., description="Path of the media file"),
    kind: MediaType = Query(MediaType.MOVIE, description="Item kind"),
    provider: LocalImageProvider = Depends(get_image_provider),
) -> ImagesResponse:
    """Select the primary image stored next to a media file."""
    item = create_item(kind, path)
    if not supports(item):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported item kind: {kind.value}",
        )

    if not get_config().images.enabled:
        return ImagesResponse()

    images = provider.get_images(item)
    return ImagesResponse(images=[ImageResponse.from_image(image) for image in images])
