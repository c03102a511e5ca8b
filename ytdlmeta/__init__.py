"""
ytdlmeta - local metadata for yt-dlp downloads

Enriches media library items from the .info.json sidecars written by
yt-dlp / youtube-dl:
- Title, description, dates, tags and genres
- Provider ids with per-extractor fixes
- Uploader credit
- Primary image selection among downloaded thumbnails
"""

__version__ = "1.0.0"
__license__ = "MIT"

from ytdlmeta.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
