"""Release file cache implementation.

Provides a persistent cache that maps source URLs to local files. Files are
downloaded on first request and reused afterwards, across processes.
"""

import hashlib
import json
import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any

import httpx
from filelock import FileLock

from jaspardata.cache.download import compute_file_hash, download_file
from jaspardata.constants import (
    CACHE_DIR_ENV_VAR,
    DEFAULT_CACHE_DIR,
    DEFAULT_TIMEOUT,
    LOCK_FILENAME,
    REGISTRY_FILENAME,
)
from jaspardata.errors import NotFoundError

logger = logging.getLogger(__name__)


def _resolve_cache_dir(cache_dir: Path | str | None = None) -> Path:
    """Resolve the cache directory, creating it if necessary.

    Priority:
    1. ``cache_dir`` argument
    2. ``JASPARDATA_CACHE_DIR`` environment variable
    3. ``~/.jaspardata/cache`` (default)

    Returns:
        Path to the cache directory
    """
    if cache_dir is None:
        env_dir = os.environ.get(CACHE_DIR_ENV_VAR)
        cache_dir = Path(env_dir) if env_dir else DEFAULT_CACHE_DIR

    cache_dir = Path(cache_dir).expanduser()
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def _cache_filename(source_url: str) -> str:
    """Local file name for a URL: short URL hash plus the URL's base name."""
    url_hash = hashlib.sha256(source_url.encode("utf-8")).hexdigest()
    basename = Path(httpx.URL(source_url).path).name or "download"
    return f"{url_hash[:12]}_{basename}"


class FileCache:
    """Persistent URL-keyed file cache.

    The registry (``registry.json``) lives in the cache directory next to the
    cached files. Writers hold an exclusive file lock, so concurrent requests
    for the same URL download it once.

    Args:
        cache_dir: Cache directory (defaults to $JASPARDATA_CACHE_DIR or
            ~/.jaspardata/cache)
        timeout: HTTP request timeout in seconds
        transport: Optional httpx transport passed to downloads

    Example:
        >>> cache = FileCache()
        >>> path = cache.fetch_or_get(
        ...     "https://jaspar.elixir.no/download/database/JASPAR2024.sql.gz"
        ... )
    """

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.cache_dir = _resolve_cache_dir(cache_dir)
        self.timeout = timeout
        self.transport = transport
        self._lock = FileLock(str(self.cache_dir / LOCK_FILENAME))

    @property
    def registry_path(self) -> Path:
        return self.cache_dir / REGISTRY_FILENAME

    def _load_registry(self) -> dict[str, Any]:
        """Load the cache registry from disk.

        Returns:
            Registry dict mapping source URLs to entry metadata
        """
        if self.registry_path.exists():
            try:
                with open(self.registry_path) as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                # Cached files are re-registered as they are fetched again
                logger.warning(f"Ignoring unreadable cache registry {self.registry_path}: {e}")
        return {"_version": "1.0", "entries": {}}

    def _save_registry(self, registry: dict[str, Any]) -> None:
        """Save the cache registry, replacing the previous file atomically."""
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".json.part")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(registry, f, indent=2)
            tmp_path.replace(self.registry_path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def _register(self, source_url: str, cached_file: Path, metadata: dict[str, Any]) -> None:
        registry = self._load_registry()
        registry["entries"][source_url] = {
            "filename": cached_file.name,
            "cached_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "file_size_bytes": cached_file.stat().st_size,
            "sha256": metadata.get("sha256"),
            "download_metadata": metadata,
        }
        self._save_registry(registry)

    def get_cached(self, source_url: str) -> Path | None:
        """Get the cached file for a URL without downloading.

        Args:
            source_url: Source URL the file was fetched from

        Returns:
            Path to cached file, or None if not cached
        """
        entry = self._load_registry().get("entries", {}).get(source_url)
        if entry is None:
            return None

        cached_file = self.cache_dir / entry["filename"]
        if not cached_file.exists():
            return None
        return cached_file

    def fetch_or_get(self, source_url: str) -> Path:
        """Return the local file for a URL, downloading it on a cache miss.

        Args:
            source_url: URL of the file

        Returns:
            Path to the cached file

        Raises:
            httpx.HTTPError: If the download fails
            OSError: If the file cannot be written to the cache
        """
        with self._lock:
            cached_file = self.get_cached(source_url)
            if cached_file is not None:
                logger.debug(f"Cache hit for {source_url}: {cached_file.name}")
                return cached_file

            cached_file = self.cache_dir / _cache_filename(source_url)

            # Download next to the final location, then rename into place
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".part")
            os.close(fd)
            tmp_path = Path(tmp_name)
            try:
                metadata = download_file(
                    source_url, tmp_path, timeout=self.timeout, transport=self.transport
                )
                tmp_path.replace(cached_file)
            finally:
                tmp_path.unlink(missing_ok=True)

            self._register(source_url, cached_file, metadata)
            logger.info(f"Cached {source_url} as {cached_file.name}")

        return cached_file

    def add_to_cache(self, local_file: Path | str, source_url: str) -> Path:
        """Register an existing local file as the cached copy of a URL.

        Copies the file into the cache directory, replacing any previous
        entry for the same URL.

        Args:
            local_file: Path to the local file
            source_url: URL the file corresponds to

        Returns:
            Path to the cached copy

        Raises:
            NotFoundError: If local_file does not exist
        """
        local_file = Path(local_file)

        if not local_file.exists():
            raise NotFoundError(f"File not found: {local_file}")

        with self._lock:
            cached_file = self.cache_dir / _cache_filename(source_url)
            shutil.copy2(local_file, cached_file)

            metadata = {
                "url": source_url,
                "source_file": str(local_file),
                "file_size_bytes": cached_file.stat().st_size,
                "sha256": compute_file_hash(cached_file),
            }
            self._register(source_url, cached_file, metadata)

        logger.info(f"Added {local_file} to cache as {cached_file.name}")
        return cached_file

    def list_cached(self) -> list[dict[str, Any]]:
        """List all cached files.

        Returns:
            List of dicts with source_url, filename, path, cached_at,
            file_size_bytes and sha256, most recently cached first
        """
        registry = self._load_registry()

        cached = []
        for source_url, entry in registry.get("entries", {}).items():
            cached_file = self.cache_dir / entry["filename"]
            if cached_file.exists():
                cached.append({
                    "source_url": source_url,
                    "filename": entry["filename"],
                    "path": cached_file,
                    "cached_at": entry.get("cached_at", "unknown"),
                    "file_size_bytes": entry.get("file_size_bytes", 0),
                    "sha256": entry.get("sha256"),
                })

        cached.sort(key=lambda x: x.get("cached_at", ""), reverse=True)
        return cached

    def remove_cached(self, source_url: str) -> bool:
        """Remove the cached file for a URL.

        Args:
            source_url: Source URL of the cached file

        Returns:
            True if removed, False if the URL was not cached
        """
        with self._lock:
            registry = self._load_registry()
            entry = registry.get("entries", {}).pop(source_url, None)
            if entry is None:
                return False

            cached_file = self.cache_dir / entry["filename"]
            if cached_file.exists():
                cached_file.unlink()
            self._save_registry(registry)

        logger.info(f"Removed cached file for {source_url}")
        return True
