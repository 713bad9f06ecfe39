"""Release catalog.

This module provides the catalog of JASPAR releases bundled with the package
and the lookups used to pick one release from it.
"""

from jaspardata.catalog.loader import (
    Catalog,
    CatalogEntry,
    list_releases,
    load_catalog,
    resolve_release,
)

__all__ = [
    "Catalog",
    "CatalogEntry",
    "list_releases",
    "load_catalog",
    "resolve_release",
]
