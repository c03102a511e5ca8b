"""
Image dimension probing.

Reads pixel dimensions of local image files without decoding them fully.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Protocol, Union

from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel dimensions of an image."""

    width: int
    height: int


class ImageProbe(Protocol):
    """Capability declaration and dimension query used by image selection."""

    @property
    def supported_input_formats(self) -> FrozenSet[str]:
        """Lower-case file extensions without the leading dot."""
        ...

    def get_image_dimensions(self, path: Union[str, Path]) -> ImageDimensions:
        ...


class PillowImageProbe:
    """ImageProbe backed by Pillow; only the image header is read."""

    def __init__(self):
        self._formats = self._load_formats()

    @staticmethod
    def _load_formats() -> FrozenSet[str]:
        Image.init()
        return frozenset(
            ext.lower().lstrip(".")
            for ext, fmt in Image.registered_extensions().items()
            if fmt in Image.OPEN
        )

    @property
    def supported_input_formats(self) -> FrozenSet[str]:
        return self._formats

    def get_image_dimensions(self, path: Union[str, Path]) -> ImageDimensions:
        """
        Get the pixel dimensions of an image.

        Raises:
            OSError: The file is missing or not a readable image.
        """
        with Image.open(path) as img:
            width, height = img.size
        return ImageDimensions(width=width, height=height)
