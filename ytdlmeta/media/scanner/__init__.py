"""
Local file system helpers.
"""

from ytdlmeta.media.scanner.file_listing import FileSystemEntry, get_file_info, list_directory

__all__ = [
    "FileSystemEntry",
    "get_file_info",
    "list_directory",
]
