"""
yt-dlp / youtube-dl ``.info.json`` sidecar files.

Parses the descriptor written next to each downloaded video. Parsing is
structural: missing keys become None and unknown keys are ignored.
"""

import json
import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ytdlmeta.media.providers.base import SidecarFormatError, SidecarNotFoundError

logger = logging.getLogger(__name__)

INFO_JSON_SUFFIX = ".info.json"


class InfoJson(BaseModel):
    """Fields of an info.json descriptor used for metadata."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    extractor_key: str

    # Human readable uploader name
    uploader: Optional[str] = None
    uploader_id: Optional[str] = None
    channel_id: Optional[str] = None

    timestamp: Optional[int] = None
    upload_date: Optional[str] = None  # YYYYMMDD
    release_date: Optional[str] = None  # YYYYMMDD

    title: Optional[str] = None
    fulltitle: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None

    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    age_limit: Optional[int] = None
    series: Optional[str] = None

    tags: Optional[Tuple[str, ...]] = None
    categories: Optional[Tuple[str, ...]] = None

    # NRK extractors need this instead of id for a working link
    playlist_id: Optional[str] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def truncate_timestamp(cls, v):
        """yt-dlp sometimes writes fractional timestamps."""
        if isinstance(v, float):
            # 1e400 and NaN parse as non-finite floats; treat them as absent
            if not math.isfinite(v):
                return None
            return int(v)
        return v

    @property
    def is_episode(self) -> bool:
        return self.series is not None


def find_info_json(media_path: Union[str, Path], suffix: str = INFO_JSON_SUFFIX) -> Path:
    """
    Compute the sidecar path for a media item.

    The sidecar lives in the item's directory (the path itself for folder
    items) and shares the item's base name.

    Args:
        media_path: Path of the media item.
        suffix: Sidecar suffix, ``.info.json`` by default.

    Returns:
        Path to the sidecar, whether or not it exists.
    """
    path = Path(media_path)
    directory = path if path.is_dir() else path.parent
    return directory / f"{path.stem}{suffix}"


def read_info_json(info_path: Union[str, Path]) -> InfoJson:
    """
    Parse an info.json file.

    Args:
        info_path: Path to the sidecar.

    Returns:
        Parsed InfoJson.

    Raises:
        SidecarNotFoundError: The file does not exist.
        SidecarFormatError: The file is not valid JSON or fields have the wrong type.
    """
    path = Path(info_path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SidecarNotFoundError(f"Sidecar not found: {path}", path=path, original_error=e)
    except UnicodeDecodeError as e:
        raise SidecarFormatError(f"Sidecar is not UTF-8: {path}", path=path, original_error=e)

    try:
        return InfoJson.model_validate(json.loads(content))
    except json.JSONDecodeError as e:
        raise SidecarFormatError(f"Invalid JSON in {path}: {e}", path=path, original_error=e)
    except ValidationError as e:
        raise SidecarFormatError(
            f"Unexpected field types in {path}: {e.error_count()} error(s)",
            path=path,
            original_error=e,
        )
