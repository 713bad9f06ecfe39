"""SQLite database builder.

JASPAR publishes each release as a gzip-compressed SQL dump. This module turns
such a dump into a standalone SQLite database file.
"""

import gzip
import logging
import sqlite3
from pathlib import Path

from jaspardata.errors import NotFoundError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def _read_dump(dump_path: Path) -> str:
    with open(dump_path, "rb") as f:
        is_gzip = f.read(2) == GZIP_MAGIC

    if is_gzip:
        with gzip.open(dump_path, "rt", encoding="utf-8") as f:
            return f.read()
    return dump_path.read_text(encoding="utf-8")


def build_sqlite(
    dump_path: Path | str,
    output_path: Path | str,
    overwrite: bool = False,
) -> Path:
    """Build a SQLite database from a (gzipped) SQL dump.

    The database is written to a temporary file and renamed into place once
    the whole dump has been executed.

    Args:
        dump_path: Path to a .sql.gz or .sql dump
        output_path: Path of the SQLite file to create
        overwrite: Replace output_path if it already exists

    Returns:
        Path to the SQLite database

    Raises:
        NotFoundError: If dump_path does not exist
        FileExistsError: If output_path exists and overwrite is False
        sqlite3.Error: If the dump cannot be executed

    Example:
        >>> handle = open_release("JASPAR2024")
        >>> db = build_sqlite(handle.local_path, "JASPAR2024.sqlite")
    """
    dump_path = Path(dump_path)
    output_path = Path(output_path)

    if not dump_path.exists():
        raise NotFoundError(f"SQL dump not found: {dump_path}")
    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".part")
    tmp_path.unlink(missing_ok=True)

    logger.info(f"Building SQLite database from {dump_path}")
    script = _read_dump(dump_path)

    try:
        conn = sqlite3.connect(tmp_path)
        try:
            conn.executescript(script)
            conn.commit()
        finally:
            conn.close()
        tmp_path.replace(output_path)
    finally:
        tmp_path.unlink(missing_ok=True)

    logger.info(f"Saved SQLite database to {output_path}")
    return output_path
