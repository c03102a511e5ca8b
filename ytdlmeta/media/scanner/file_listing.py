"""
Directory listing for local providers.

Lists the files of a single directory with the attributes the providers need.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileSystemEntry:
    """A file found in a directory listing."""

    path: Path
    last_write_time_utc: datetime
    size: int = 0

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        """Extension with its leading dot, as found on disk."""
        return self.path.suffix

    @property
    def full_name(self) -> str:
        return str(self.path)

    @classmethod
    def from_path(cls, path: Path) -> "FileSystemEntry":
        stat = path.stat()
        return cls(
            path=path,
            last_write_time_utc=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            size=stat.st_size,
        )


def get_file_info(path: Union[str, Path]) -> Optional[FileSystemEntry]:
    """
    Get the entry for a single file.

    Args:
        path: File path.

    Returns:
        FileSystemEntry or None if the file does not exist.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return None
    return FileSystemEntry.from_path(file_path)


def list_directory(directory: Union[str, Path]) -> List[FileSystemEntry]:
    """
    List the files of a directory, non-recursively, in name order.

    Args:
        directory: Directory to list.

    Returns:
        List of FileSystemEntry; empty when the directory cannot be read.
    """
    entries: List[FileSystemEntry] = []

    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                if not dir_entry.is_file():
                    continue
                try:
                    entries.append(FileSystemEntry.from_path(Path(dir_entry.path)))
                except OSError as e:
                    logger.debug(f"Skipping unreadable file {dir_entry.path}: {e}")
    except FileNotFoundError:
        logger.debug(f"Directory not found: {directory}")
    except PermissionError:
        logger.warning(f"Permission denied listing {directory}")
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")

    entries.sort(key=lambda entry: entry.name)
    return entries
