"""
Local image provider.

Picks the primary image for an item among the images stored next to it.
yt-dlp writes thumbnails as ``<stem>.jpg`` or ``<stem>_<n>.webp`` and so on,
so every supported image whose name starts with the item's stem is a
candidate, and the widest one wins.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ytdlmeta.media.images.probe import ImageProbe, PillowImageProbe
from ytdlmeta.media.items import MediaItem, supports
from ytdlmeta.media.scanner.file_listing import FileSystemEntry, list_directory

logger = logging.getLogger(__name__)


class ImageType(Enum):
    """Role of an image on an item."""

    PRIMARY = "primary"


@dataclass(frozen=True)
class ImageCandidate:
    """An image file with its probed dimensions."""

    entry: FileSystemEntry
    width: int
    height: int


@dataclass(frozen=True)
class LocalImageInfo:
    """An image selected for an item."""

    entry: FileSystemEntry
    image_type: ImageType = ImageType.PRIMARY
    width: int = 0
    height: int = 0

    @property
    def path(self) -> str:
        return self.entry.full_name


def select_largest_image(
    item_path: Union[str, Path],
    entries: Iterable[FileSystemEntry],
    probe: ImageProbe,
) -> Optional[ImageCandidate]:
    """
    Select the widest image related to an item.

    Args:
        item_path: Path of the media item; its stem is matched case-sensitively
            as a prefix of the file names.
        entries: Directory listing, in listing order.
        probe: Supplies the supported extensions and image dimensions.

    Returns:
        The candidate with the strictly greatest width (the first one on ties),
        or None when no file qualifies.
    """
    stem = Path(item_path).stem
    formats = probe.supported_input_formats
    best: Optional[ImageCandidate] = None
    best_width = 0

    for entry in entries:
        if not entry.name.startswith(stem):
            continue
        if entry.extension.lower().lstrip(".") not in formats:
            continue

        try:
            size = probe.get_image_dimensions(entry.full_name)
        except Exception as e:
            logger.warning(f"Skipping image {entry.full_name}: {e}")
            continue

        if size.width > best_width:
            best = ImageCandidate(entry=entry, width=size.width, height=size.height)
            best_width = size.width

    return best


class LocalImageProvider:
    """
    Local primary image provider for yt-dlp downloads.

    Only looks at the item's own directory; never fetches anything.
    """

    def __init__(self, probe: Optional[ImageProbe] = None):
        self.probe = probe or PillowImageProbe()

    @property
    def name(self) -> str:
        return "YouTube Metadata"

    @property
    def order(self) -> int:
        return 1

    def supports(self, item: Optional[MediaItem]) -> bool:
        return supports(item)

    def get_images(self, item: Optional[MediaItem]) -> List[LocalImageInfo]:
        """
        Get the local images for an item.

        Args:
            item: Item to find images for.

        Returns:
            A single primary image, or an empty list.
        """
        if item is None or item.containing_folder_path is None:
            return []

        logger.debug(f"Looking for local images for {item.path}")
        entries = list_directory(item.containing_folder_path)
        largest = select_largest_image(item.path, entries, self.probe)

        if largest is None:
            return []

        logger.debug(
            f"Picking {largest.entry.name} with dimensions {largest.width}x{largest.height}"
        )
        return [
            LocalImageInfo(
                entry=largest.entry,
                image_type=ImageType.PRIMARY,
                width=largest.width,
                height=largest.height,
            )
        ]
