"""
Extractor identity resolution.

Maps the ``extractor_key`` written by yt-dlp to the canonical provider key
used for external ids, and applies per-provider id fixes.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ytdlmeta.media.providers.info_json import InfoJson

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTOR_KEY_MAPPING: Mapping[str, str] = MappingProxyType({
    "NRKTV": "NRK",
})

# Canonical keys whose extractors put the usable id in playlist_id.
# The NRK extractors' own id does not produce a valid tv.nrk.no URL.
DEFAULT_PLAYLIST_ID_PROVIDERS = frozenset({"NRK"})


class ExtractorKeyResolver:
    """
    Resolves upstream extractor names to canonical provider keys.

    Lookups are case-insensitive; unknown keys pass through unchanged.
    The tables are read-only once constructed.
    """

    def __init__(
        self,
        mapping: Optional[Mapping[str, str]] = None,
        playlist_id_providers: Optional[Iterable[str]] = None,
    ):
        if mapping is None:
            mapping = DEFAULT_EXTRACTOR_KEY_MAPPING
        if playlist_id_providers is None:
            playlist_id_providers = DEFAULT_PLAYLIST_ID_PROVIDERS

        self._mapping: Mapping[str, str] = MappingProxyType(
            {key.casefold(): value for key, value in mapping.items()}
        )
        self._playlist_id_providers = frozenset(playlist_id_providers)

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    @property
    def playlist_id_providers(self) -> frozenset:
        return self._playlist_id_providers

    def resolve(self, extractor_key: str) -> str:
        """
        Get the canonical provider key for an extractor.

        Args:
            extractor_key: extractor_key from the sidecar.

        Returns:
            Canonical key, or extractor_key itself when not mapped.
        """
        return self._mapping.get(extractor_key.casefold(), extractor_key)

    def effective_id(self, canonical_key: str, info: InfoJson) -> Optional[str]:
        """
        Get the external id to store for a sidecar.

        Args:
            canonical_key: Result of resolve().
            info: Parsed sidecar.

        Returns:
            playlist_id for providers with a known id bug, else id.
        """
        if canonical_key in self._playlist_id_providers:
            logger.debug(f"Using playlist_id for {canonical_key} item {info.id}")
            return info.playlist_id
        return info.id

    @classmethod
    def from_config(cls) -> "ExtractorKeyResolver":
        """Build a resolver from the loaded configuration."""
        from ytdlmeta.config import get_config

        metadata_config = get_config().metadata
        return cls(
            mapping=metadata_config.extractor_key_mapping,
            playlist_id_providers=metadata_config.playlist_id_providers,
        )
