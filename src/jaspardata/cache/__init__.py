"""Local file cache for release downloads.

This module provides a persistent, URL-keyed cache so each release file is
downloaded once and reused afterwards.
"""

from jaspardata.cache.download import compute_file_hash, download_file
from jaspardata.cache.registry import FileCache

__all__ = [
    "FileCache",
    "compute_file_hash",
    "download_file",
]
