"""Release catalog loading and lookup.

Provides functions for loading the release metadata table into an immutable
catalog, resolving a release to its download URL, and listing releases.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import pandas as pd

from jaspardata.constants import RELEASE_COLUMN, SOURCE_COLUMN
from jaspardata.errors import (
    AmbiguousReleaseError,
    NotFoundError,
    SchemaError,
    UnknownReleaseError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """One row of the release metadata table.

    Attributes:
        release_id: Release identifier (the ``Title`` column)
        source_url: Download location (the ``SourceUrl`` column)
        extra: Remaining columns, carried through but not interpreted
    """

    release_id: str
    source_url: str
    extra: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered collection of release entries."""

    entries: tuple[CatalogEntry, ...] = ()
    source_path: Path | None = None

    def __len__(self) -> int:
        return len(self.entries)

    def resolve(self, release_id: str) -> str:
        """Resolve a release to its source URL. See :func:`resolve_release`."""
        return resolve_release(self, release_id)

    def list_releases(self) -> list[str]:
        """List releases newest first. See :func:`list_releases`."""
        return list_releases(self)


def load_catalog(
    source_path: Path | str,
    release_column: str = RELEASE_COLUMN,
    source_column: str = SOURCE_COLUMN,
) -> Catalog:
    """Load a release metadata CSV into a Catalog.

    Only the presence of the two required columns is checked here; row
    contents are not validated, and an empty table yields an empty catalog.

    Args:
        source_path: Path to the metadata CSV file
        release_column: Column holding release identifiers
        source_column: Column holding download URLs

    Returns:
        Catalog with one entry per row, in file order

    Raises:
        NotFoundError: If source_path does not exist
        SchemaError: If a required column is missing

    Example:
        >>> catalog = load_catalog("extdata/metadata.csv")
        >>> print(f"Loaded {len(catalog)} releases")
    """
    source_path = Path(source_path)

    if not source_path.exists():
        raise NotFoundError(f"Metadata file not found: {source_path}")

    try:
        df = pd.read_csv(source_path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        df = pd.DataFrame()

    required = [release_column, source_column]
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise SchemaError(
            f"Required column(s) missing in {source_path.name}: {', '.join(missing)}",
            missing_columns=missing,
        )

    entries = []
    for row in df.to_dict(orient="records"):
        release_id = row.pop(release_column)
        source_url = row.pop(source_column)
        entries.append(CatalogEntry(release_id=release_id, source_url=source_url, extra=row))

    logger.info(f"Loaded {len(entries)} release entries from {source_path}")
    return Catalog(entries=tuple(entries), source_path=source_path)


def resolve_release(catalog: Catalog, release_id: str) -> str:
    """Resolve a release identifier to exactly one source URL.

    Matching is exact and case-sensitive.

    Args:
        catalog: Catalog to search
        release_id: Release identifier, e.g. "JASPAR2024"

    Returns:
        The matching entry's source URL

    Raises:
        ValueError: If release_id is empty
        UnknownReleaseError: If no entry matches
        AmbiguousReleaseError: If more than one entry matches

    Example:
        >>> url = resolve_release(catalog, "JASPAR2024")
    """
    if not release_id:
        raise ValueError("Release identifier must be a non-empty string")

    matches = [entry for entry in catalog.entries if entry.release_id == release_id]

    if len(matches) == 0:
        raise UnknownReleaseError(release_id, available=list_releases(catalog))
    if len(matches) > 1:
        raise AmbiguousReleaseError(release_id, count=len(matches))

    return matches[0].source_url


def _release_number(release_id: str) -> int | None:
    """Integer formed by the digits of a release id, or None if it has none."""
    digits = re.sub(r"\D", "", release_id)
    return int(digits) if digits else None


def list_releases(catalog: Catalog) -> list[str]:
    """List the distinct release identifiers in a catalog, newest first.

    When every identifier contains digits, releases are ordered by the integer
    those digits form, descending ("JASPAR2024" before "JASPAR2022"). Otherwise
    they fall back to reverse lexicographic order.

    Args:
        catalog: Catalog to list

    Returns:
        Ordered list of release identifiers

    Example:
        >>> list_releases(catalog)
        ['JASPAR2024', 'JASPAR2022', 'JASPAR2020']
    """
    releases = list(dict.fromkeys(entry.release_id for entry in catalog.entries))

    numbers = [_release_number(release) for release in releases]
    if all(number is not None for number in numbers):
        ordered = sorted(zip(numbers, releases), key=lambda pair: pair[0], reverse=True)
        return [release for _, release in ordered]

    return sorted(releases, reverse=True)
