"""Exception hierarchy for jaspardata.

Every failure raised by the catalog, cache, and resolver derives from
``JasparDataError`` so callers can catch the whole family at once, while the
subclasses keep the individual failure kinds apart.
"""

from collections.abc import Sequence

__all__ = [
    "AmbiguousReleaseError",
    "EmptyResultError",
    "FetchError",
    "JasparDataError",
    "NotFoundError",
    "SchemaError",
    "UnknownReleaseError",
]


class JasparDataError(Exception):
    """Base exception for jaspardata failures."""


class NotFoundError(JasparDataError, FileNotFoundError):
    """Raised when a required local file (e.g. metadata.csv) does not exist."""


class SchemaError(JasparDataError):
    """Raised when the metadata table lacks one or more required columns."""

    def __init__(self, message: str, *, missing_columns: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing_columns = tuple(missing_columns)


class UnknownReleaseError(JasparDataError, LookupError):
    """Raised when a requested release is not listed in the catalog."""

    def __init__(self, release_id: str, available: Sequence[str] = ()) -> None:
        super().__init__(
            f"Requested JASPAR release '{release_id}' is not available in this package. "
            "Call get_available_releases() to see available releases."
        )
        self.release_id = release_id
        self.available = tuple(available)


class AmbiguousReleaseError(JasparDataError, LookupError):
    """Raised when a release is listed more than once in the catalog."""

    def __init__(self, release_id: str, count: int) -> None:
        super().__init__(
            f"Release '{release_id}' matches {count} catalog rows; "
            "the metadata table must define each release exactly once."
        )
        self.release_id = release_id
        self.count = count


class FetchError(JasparDataError):
    """Raised when the cache could not provide a file for a source URL.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, source_url: str) -> None:
        super().__init__(message)
        self.source_url = source_url


class EmptyResultError(JasparDataError):
    """Raised when the cache reports success but returns no usable file."""

    def __init__(self, message: str, *, source_url: str) -> None:
        super().__init__(message)
        self.source_url = source_url
