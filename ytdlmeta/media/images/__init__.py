"""
Local image selection.
"""

from ytdlmeta.media.images.local_images import (
    ImageCandidate,
    ImageType,
    LocalImageInfo,
    LocalImageProvider,
    select_largest_image,
)
from ytdlmeta.media.images.probe import ImageDimensions, ImageProbe, PillowImageProbe

__all__ = [
    "ImageCandidate",
    "ImageDimensions",
    "ImageProbe",
    "ImageType",
    "LocalImageInfo",
    "LocalImageProvider",
    "PillowImageProbe",
    "select_largest_image",
]
