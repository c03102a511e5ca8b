"""
Media item model.

The host-owned entities that sidecar metadata is applied to. Only the fields
the providers read or write are modelled here.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class MediaType(Enum):
    """Type of media content."""

    MOVIE = "movie"
    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"
    MUSIC_VIDEO = "music_video"
    TRAILER = "trailer"
    OTHER = "other"


# Item kinds the local providers and external ids apply to
SUPPORTED_MEDIA_TYPES = frozenset(
    {MediaType.MOVIE, MediaType.MUSIC_VIDEO, MediaType.EPISODE, MediaType.TRAILER}
)


@dataclass
class MediaItem:
    """A media item in the host library."""

    path: Optional[str] = None
    media_type: MediaType = MediaType.OTHER
    name: Optional[str] = None
    overview: Optional[str] = None

    # External IDs, keyed by canonical provider key
    provider_ids: Dict[str, Optional[str]] = field(default_factory=dict)

    # Dates
    production_year: Optional[int] = None
    premiere_date: Optional[datetime] = None
    date_last_saved: Optional[datetime] = None

    genres: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @property
    def containing_folder_path(self) -> Optional[Path]:
        """Directory holding the item (the path itself for folder items)."""
        if not self.path:
            return None
        path = Path(self.path)
        if path.is_dir():
            return path
        return path.parent

    def add_tag(self, tag: str) -> None:
        """Add a tag, keeping first-seen order and skipping duplicates."""
        if tag not in self.tags:
            self.tags.append(tag)

    def add_genre(self, genre: str) -> None:
        """Add a genre, keeping first-seen order and skipping duplicates."""
        if genre not in self.genres:
            self.genres.append(genre)


@dataclass
class Movie(MediaItem):
    """A standalone work."""

    media_type: MediaType = MediaType.MOVIE


@dataclass
class MusicVideo(MediaItem):
    media_type: MediaType = MediaType.MUSIC_VIDEO


@dataclass
class Trailer(MediaItem):
    media_type: MediaType = MediaType.TRAILER


@dataclass
class Episode(MediaItem):
    """An episode of a series."""

    media_type: MediaType = MediaType.EPISODE
    series_name: Optional[str] = None
    # Episode number
    index_number: Optional[int] = None
    # Season number
    parent_index_number: Optional[int] = None


def supports(item: Optional[MediaItem]) -> bool:
    """Check whether an item is of a kind the local providers handle."""
    return item is not None and item.media_type in SUPPORTED_MEDIA_TYPES


def create_item(media_type: MediaType, path: Optional[str] = None) -> MediaItem:
    """Instantiate the item class matching a media type."""
    item_classes = {
        MediaType.MOVIE: Movie,
        MediaType.EPISODE: Episode,
        MediaType.MUSIC_VIDEO: MusicVideo,
        MediaType.TRAILER: Trailer,
    }
    item_class = item_classes.get(media_type)
    if item_class is None:
        return MediaItem(path=path, media_type=media_type)
    return item_class(path=path)
