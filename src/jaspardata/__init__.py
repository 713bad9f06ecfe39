"""Jaspardata: versioned JASPAR database releases with local caching.

Jaspardata bundles a catalog of JASPAR transcription factor binding profile
database releases, downloads the requested release once into a local cache,
and returns the path of the cached file.

Example:
    >>> from jaspardata import get_available_releases, open_release
    >>> get_available_releases()
    ['JASPAR2024', 'JASPAR2022', 'JASPAR2020']
    >>> handle = open_release("JASPAR2024")
    >>> handle.local_path
"""

__version__ = "0.1.0"

from jaspardata.cache.registry import FileCache
from jaspardata.catalog.loader import Catalog, load_catalog
from jaspardata.errors import (
    AmbiguousReleaseError,
    EmptyResultError,
    FetchError,
    JasparDataError,
    NotFoundError,
    SchemaError,
    UnknownReleaseError,
)
from jaspardata.resolver import (
    ArtifactHandle,
    get_available_releases,
    open_release,
    resolve_artifact,
)
from jaspardata.sqlite import build_sqlite

__all__ = [
    "__version__",
    "AmbiguousReleaseError",
    "ArtifactHandle",
    "Catalog",
    "EmptyResultError",
    "FetchError",
    "FileCache",
    "JasparDataError",
    "NotFoundError",
    "SchemaError",
    "UnknownReleaseError",
    "build_sqlite",
    "get_available_releases",
    "load_catalog",
    "open_release",
    "resolve_artifact",
]
