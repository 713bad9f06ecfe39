"""Constants for jaspardata.

This module contains the bundled metadata location, the metadata column names,
and the defaults used by the local file cache.
"""

from pathlib import Path

# Bundled release metadata (one row per JASPAR release)
METADATA_PATH = Path(__file__).parent / "extdata" / "metadata.csv"

# Metadata columns read by the catalog
RELEASE_COLUMN = "Title"  # Release identifier, e.g. "JASPAR2024"
SOURCE_COLUMN = "SourceUrl"  # Where the release file is downloaded from

REQUIRED_COLUMNS = [RELEASE_COLUMN, SOURCE_COLUMN]

# Local file cache
CACHE_DIR_ENV_VAR = "JASPARDATA_CACHE_DIR"
DEFAULT_CACHE_DIR = Path.home() / ".jaspardata" / "cache"
REGISTRY_FILENAME = "registry.json"
LOCK_FILENAME = "registry.lock"

# HTTP settings
DEFAULT_TIMEOUT = 120.0  # Release dumps are tens of MB
DOWNLOAD_CHUNK_SIZE = 1024 * 1024
