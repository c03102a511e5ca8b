"""
Local metadata provider for yt-dlp downloads.

Reads the ``.info.json`` sidecar next to a downloaded video and maps it onto
a movie (standalone work) or an episode (when the sidecar names a series).
"""

import logging
import re
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Tuple, Union

from ytdlmeta.media.items import Episode, MediaItem, Movie
from ytdlmeta.media.providers.base import (
    LocalMetadataProvider,
    MetadataResult,
    PersonInfo,
    SidecarFormatError,
    SidecarNotFoundError,
    SidecarParseError,
    check_cancelled,
)
from ytdlmeta.media.providers.extractors import ExtractorKeyResolver
from ytdlmeta.media.providers.info_json import INFO_JSON_SUFFIX, InfoJson, find_info_json, read_info_json
from ytdlmeta.media.scanner.file_listing import get_file_info

logger = logging.getLogger(__name__)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# The host has no uploader role; channel owners are credited as directors
UPLOADER_JOB = "Director"

_YYYYMMDD = re.compile(r"^\d{8}$")


def parse_ytdl_date(value: str, field_name: str) -> datetime:
    """
    Parse a yt-dlp YYYYMMDD date.

    Args:
        value: Date string.
        field_name: Sidecar field the value came from, for error reporting.

    Returns:
        Midnight UTC of that date.

    Raises:
        SidecarParseError: The value is not a valid YYYYMMDD date.
    """
    if not _YYYYMMDD.match(value):
        raise SidecarParseError(f"Invalid {field_name}: {value!r}", field_name=field_name, value=value)
    try:
        parsed = datetime.strptime(value, "%Y%m%d")
    except ValueError as e:
        raise SidecarParseError(
            f"Invalid {field_name}: {value!r}", field_name=field_name, value=value, original_error=e
        )
    return parsed.replace(tzinfo=timezone.utc)


def resolve_premiere_date(info: InfoJson) -> Optional[datetime]:
    """
    Pick the production date of a sidecar.

    release_date wins over upload_date, and either wins over timestamp. A
    malformed date string raises rather than falling back to the timestamp.

    Returns:
        The date, or None when the sidecar carries no usable date.
    """
    if info.release_date is not None:
        return parse_ytdl_date(info.release_date, "release_date")
    if info.upload_date is not None:
        return parse_ytdl_date(info.upload_date, "upload_date")
    if info.timestamp is not None and info.timestamp > 0:
        try:
            return UNIX_EPOCH + timedelta(seconds=info.timestamp)
        except OverflowError:
            logger.warning(f"Ignoring out of range timestamp {info.timestamp} for {info.id}")
    return None


def update_item_metadata(item: MediaItem, info: InfoJson, resolver: ExtractorKeyResolver) -> None:
    """
    Apply sidecar fields onto an item in place.

    Provider ids are replaced, not merged. Name and overview are always
    assigned, even when the sidecar lacks them. Dates are left untouched when
    the sidecar has none. Tags and categories are trimmed and deduplicated.

    Raises:
        SidecarParseError: The release or upload date is malformed. Fields
            before the date step have already been written at that point.
    """
    extractor = resolver.resolve(info.extractor_key)
    item.provider_ids = {extractor: resolver.effective_id(extractor, info)}

    item.name = info.fulltitle
    item.overview = info.description

    premiere_date = resolve_premiere_date(info)
    if premiere_date is not None:
        item.production_year = premiere_date.year
        item.premiere_date = premiere_date

    for tag in info.tags or []:
        tag = tag.strip()
        if tag:
            item.add_tag(tag)

    for category in info.categories or []:
        category = category.strip()
        if category:
            item.add_genre(category)


def derive_uploader(info: InfoJson, extractor: str) -> Optional[PersonInfo]:
    """
    Build the uploader credit for a sidecar.

    The display name prefers the uploader's name, the identity prefers the
    channel id. The identity is stored under three keys so hosts can link it
    whichever form they recognise.

    Args:
        info: Parsed sidecar.
        extractor: Canonical provider key.

    Returns:
        PersonInfo, or None when the sidecar names no uploader.
    """
    if info.channel_id is None and info.uploader_id is None and info.uploader is None:
        return None

    name = info.uploader if info.uploader is not None else info.uploader_id
    identity = next(
        value for value in (info.channel_id, info.uploader_id, info.uploader) if value is not None
    )

    return PersonInfo(
        name=name,
        job=UPLOADER_JOB,
        provider_ids={
            extractor: identity,
            f"ytdl:{extractor}": identity,
            "ytdl": f"{extractor}:{identity}",
        },
    )


def add_persons(result: MetadataResult, info: InfoJson, resolver: ExtractorKeyResolver) -> None:
    """Append the uploader credit, if any, to a result."""
    uploader = derive_uploader(info, resolver.resolve(info.extractor_key))
    if uploader is not None:
        result.add_person(uploader)


class YoutubeLocalProvider(LocalMetadataProvider):
    """
    Metadata provider for yt-dlp ``.info.json`` sidecars.

    Features:
    - Movie or episode selection from the sidecar's series field
    - Extractor key normalization with per-provider id fixes
    - Uploader credit with aliased provider ids
    - Change detection from the sidecar's modification time
    """

    def __init__(
        self,
        resolver: Optional[ExtractorKeyResolver] = None,
        sidecar_suffix: str = INFO_JSON_SUFFIX,
    ):
        """
        Initialize the provider.

        Args:
            resolver: Extractor key resolver; defaults to the built-in tables.
            sidecar_suffix: Suffix appended to the media stem to find the sidecar.
        """
        self.resolver = resolver or ExtractorKeyResolver()
        self.sidecar_suffix = sidecar_suffix

    @property
    def name(self) -> str:
        return "YouTube Metadata"

    @classmethod
    def from_config(cls) -> "YoutubeLocalProvider":
        """Build a provider from the loaded configuration."""
        from ytdlmeta.config import get_config

        return cls(
            resolver=ExtractorKeyResolver.from_config(),
            sidecar_suffix=get_config().metadata.sidecar_suffix,
        )

    def get_info_json_path(self, path: Union[str, Path]) -> Path:
        return find_info_json(path, self.sidecar_suffix)

    def has_changed(self, item: MediaItem) -> bool:
        """Check whether the item's sidecar was written after the item was saved."""
        if not item.path:
            return False

        info_file = get_file_info(self.get_info_json_path(item.path))
        if info_file is None:
            return False

        if item.date_last_saved is None:
            return True

        last_saved = item.date_last_saved
        if last_saved.tzinfo is None:
            last_saved = last_saved.replace(tzinfo=timezone.utc)

        return info_file.last_write_time_utc > last_saved

    def read_info_json(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[InfoJson]:
        """
        Read the sidecar for a media path.

        Returns:
            InfoJson, or None when the sidecar is missing or unusable.

        Raises:
            MetadataCancelledError: Cancellation was requested before reading.
        """
        info, _ = self._read_sidecar(path, cancel_event)
        return info

    def _read_sidecar(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event],
    ) -> Tuple[Optional[InfoJson], Optional[str]]:
        """Read the sidecar, returning it or the reason an existing one is unusable."""
        info_path = self.get_info_json_path(path)
        check_cancelled(cancel_event, info_path)

        try:
            return read_info_json(info_path), None
        except SidecarNotFoundError:
            logger.info(f"Could not find {info_path}")
            return None, None
        except SidecarFormatError as e:
            logger.warning(f"Ignoring unusable sidecar: {e}")
            return None, str(e)

    def get_metadata(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> MetadataResult:
        """
        Read metadata for a media path, choosing the item kind from the sidecar.

        Returns:
            MetadataResult holding a Movie, or an Episode when the sidecar
            names a series. A corrupt sidecar gives an empty result with error set.

        Raises:
            SidecarParseError: The sidecar's date is malformed.
        """
        info, error = self._read_sidecar(path, cancel_event)
        if info is None:
            return MetadataResult.empty(error)

        if info.is_episode:
            return self._build_episode_result(path, info)
        return self._build_movie_result(path, info)

    def get_movie_metadata(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> MetadataResult:
        """Read metadata for a standalone work; sidecars naming a series yield nothing."""
        info, error = self._read_sidecar(path, cancel_event)
        if info is None or info.is_episode:
            return MetadataResult.empty(error)
        return self._build_movie_result(path, info)

    def get_episode_metadata(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> MetadataResult:
        """Read metadata for an episode; sidecars without a series yield nothing."""
        info, error = self._read_sidecar(path, cancel_event)
        if info is None or not info.is_episode:
            return MetadataResult.empty(error)
        return self._build_episode_result(path, info)

    def _build_movie_result(self, path: Union[str, Path], info: InfoJson) -> MetadataResult:
        item = Movie(path=str(path))
        result = MetadataResult(has_metadata=True, item=item)

        update_item_metadata(item, info, self.resolver)
        add_persons(result, info, self.resolver)
        return result

    def _build_episode_result(self, path: Union[str, Path], info: InfoJson) -> MetadataResult:
        item = Episode(
            path=str(path),
            series_name=info.series,
            index_number=info.episode_number,
            parent_index_number=info.season_number,
        )
        result = MetadataResult(has_metadata=True, item=item)

        update_item_metadata(item, info, self.resolver)
        add_persons(result, info, self.resolver)
        return result
