"""Release resolution.

Combines the release catalog with a file cache: a release identifier is
resolved to its source URL, and the cache supplies a local copy of that file.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from jaspardata.cache.registry import FileCache
from jaspardata.catalog.loader import Catalog, list_releases, load_catalog, resolve_release
from jaspardata.constants import METADATA_PATH
from jaspardata.errors import (
    EmptyResultError,
    FetchError,
    JasparDataError,
    UnknownReleaseError,
)

logger = logging.getLogger(__name__)


class ArtifactCache(Protocol):
    """Anything that can turn a source URL into a local file path."""

    def fetch_or_get(self, source_url: str) -> Path | str | None: ...


@dataclass(frozen=True)
class ArtifactHandle:
    """A resolved release and the local path of its file.

    Attributes:
        release_id: The resolved release identifier
        local_path: Absolute path to the cached release file
    """

    release_id: str
    local_path: Path


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """Catalog of the releases bundled with this package, loaded on first use."""
    return load_catalog(METADATA_PATH)


def resolve_artifact(catalog: Catalog, cache: ArtifactCache, release_id: str) -> ArtifactHandle:
    """Resolve a release and obtain its file from the cache.

    Args:
        catalog: Catalog to resolve the release in
        cache: Cache that fetches or reuses the release file
        release_id: Release identifier, e.g. "JASPAR2024"

    Returns:
        ArtifactHandle with the release identifier and local path

    Raises:
        UnknownReleaseError: If the release is not in the catalog
        AmbiguousReleaseError: If the release is listed more than once
        FetchError: If the cache failed to provide the file
        EmptyResultError: If the cache returned no usable path
    """
    source_url = resolve_release(catalog, release_id)

    try:
        local_path = cache.fetch_or_get(source_url)
    except JasparDataError:
        raise
    except Exception as e:
        raise FetchError(
            f"Failed to fetch release '{release_id}' from {source_url}: {e}",
            source_url=source_url,
        ) from e

    # Path("") is Path("."), so an empty result must be checked as a file
    if local_path is None or not Path(local_path).is_file():
        raise EmptyResultError(
            f"No file found for release '{release_id}' (source: {source_url})",
            source_url=source_url,
        )

    local_path = Path(local_path).resolve()
    logger.info(f"Resolved {release_id} to {local_path}")
    return ArtifactHandle(release_id=release_id, local_path=local_path)


def get_available_releases(metadata_path: Path | str | None = None) -> list[str]:
    """List the available releases, newest first.

    Args:
        metadata_path: Optional metadata CSV; defaults to the bundled table

    Returns:
        Release identifiers, e.g. ["JASPAR2024", "JASPAR2022", "JASPAR2020"]

    Example:
        >>> get_available_releases()[0]
        'JASPAR2024'
    """
    catalog = default_catalog() if metadata_path is None else load_catalog(metadata_path)
    return list_releases(catalog)


def open_release(
    release_id: str | None = None,
    *,
    catalog: Catalog | None = None,
    cache: ArtifactCache | None = None,
) -> ArtifactHandle:
    """Open a JASPAR release, downloading its file if it is not cached yet.

    Args:
        release_id: Release identifier; defaults to the newest available release
        catalog: Catalog to resolve in; defaults to the bundled catalog
        cache: File cache; defaults to FileCache() in the standard cache directory

    Returns:
        ArtifactHandle for the release

    Example:
        >>> handle = open_release("JASPAR2024")
        >>> print(handle.local_path)
    """
    if catalog is None:
        catalog = default_catalog()
    if cache is None:
        cache = FileCache()
    if release_id is None:
        releases = list_releases(catalog)
        if not releases:
            raise UnknownReleaseError("latest")
        release_id = releases[0]

    return resolve_artifact(catalog, cache, release_id)
