"""
Local metadata providers.

Supports:
- yt-dlp / youtube-dl .info.json sidecars
"""

from ytdlmeta.media.providers.base import (
    LocalMetadataProvider,
    MetadataCancelledError,
    MetadataProviderError,
    MetadataResult,
    PersonInfo,
    SidecarFormatError,
    SidecarNotFoundError,
    SidecarParseError,
)
from ytdlmeta.media.providers.extractors import ExtractorKeyResolver
from ytdlmeta.media.providers.info_json import InfoJson, find_info_json, read_info_json
from ytdlmeta.media.providers.youtube_local import YoutubeLocalProvider

__all__ = [
    "ExtractorKeyResolver",
    "InfoJson",
    "LocalMetadataProvider",
    "MetadataCancelledError",
    "MetadataProviderError",
    "MetadataResult",
    "PersonInfo",
    "SidecarFormatError",
    "SidecarNotFoundError",
    "SidecarParseError",
    "YoutubeLocalProvider",
    "find_info_json",
    "read_info_json",
]
