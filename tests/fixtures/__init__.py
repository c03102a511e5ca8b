"""
Test Fixtures

Shared helpers for writing sidecars and images.
"""

from .files import set_mtime, write_image

__all__ = [
    "set_mtime",
    "write_image",
]
