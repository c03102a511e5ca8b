"""
Base metadata provider classes.

Shared result types, errors and the abstract interface for local providers.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from ytdlmeta.media.items import MediaItem

logger = logging.getLogger(__name__)


class MetadataProviderError(Exception):
    """Error while reading local metadata."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.original_error = original_error


class SidecarNotFoundError(MetadataProviderError):
    """The sidecar file does not exist."""


class SidecarFormatError(MetadataProviderError):
    """The sidecar file is not valid JSON or has mistyped fields."""


class SidecarParseError(MetadataProviderError):
    """A sidecar field could not be interpreted (e.g. a malformed date)."""

    def __init__(
        self,
        message: str,
        field_name: str,
        value: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, path=path, original_error=original_error)
        self.field_name = field_name
        self.value = value


class MetadataCancelledError(MetadataProviderError):
    """The refresh was cancelled before the sidecar was read."""


@dataclass
class PersonInfo:
    """Information about a person credited on an item."""

    name: Optional[str]
    job: str = ""
    provider_ids: Dict[str, str] = field(default_factory=dict)


@dataclass
class MetadataResult:
    """Outcome of a local metadata lookup."""

    has_metadata: bool = False
    item: Optional[MediaItem] = None
    people: List[PersonInfo] = field(default_factory=list)
    # Set when a sidecar exists but cannot be used
    error: Optional[str] = None

    def add_person(self, person: PersonInfo) -> None:
        self.people.append(person)

    @classmethod
    def empty(cls, error: Optional[str] = None) -> "MetadataResult":
        return cls(has_metadata=False, error=error)


def check_cancelled(cancel_event: Optional[threading.Event], path: Optional[Union[str, Path]] = None) -> None:
    """Raise MetadataCancelledError if the caller has requested cancellation."""
    if cancel_event is not None and cancel_event.is_set():
        raise MetadataCancelledError("Metadata refresh cancelled", path=path)


class LocalMetadataProvider(ABC):
    """
    Abstract base class for providers reading metadata stored next to media.

    Providers never touch the network.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    def get_metadata(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None,
    ) -> MetadataResult:
        """
        Read metadata for the media file at path.

        Args:
            path: Path of the media item.
            cancel_event: Optional event checked before blocking reads.

        Returns:
            MetadataResult; has_metadata is False when nothing was found.
        """
        pass

    @abstractmethod
    def has_changed(self, item: MediaItem) -> bool:
        """
        Check whether the local metadata is newer than the item.

        Args:
            item: Previously imported item.

        Returns:
            True if the item should be refreshed.
        """
        pass
