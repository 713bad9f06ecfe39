"""Download functionality for release files.

Provides functions for streaming a release file to disk with metadata
tracking for reproducibility.
"""

import hashlib
import logging
import time
from pathlib import Path
from typing import Any

import httpx

from jaspardata.constants import DEFAULT_TIMEOUT, DOWNLOAD_CHUNK_SIZE

logger = logging.getLogger(__name__)


def download_file(
    url: str,
    output_path: Path | str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """Download a file over HTTP(S).

    The response body is streamed to disk and hashed as it arrives.

    Args:
        url: URL to download
        output_path: Path to write the downloaded file to
        timeout: HTTP request timeout in seconds
        transport: Optional httpx transport (used to mock the network in tests)

    Returns:
        Download metadata: url, download_timestamp, file_size_bytes, sha256
        and selected HTTP headers

    Raises:
        httpx.HTTPError: If the request fails or returns an error status

    Example:
        >>> meta = download_file(
        ...     "https://jaspar.elixir.no/download/database/JASPAR2024.sql.gz",
        ...     "JASPAR2024.sql.gz",
        ... )
        >>> print(meta["sha256"])
    """
    output_path = Path(output_path)
    logger.info(f"Downloading {url}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    download_timestamp = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

    hash_obj = hashlib.sha256()
    file_size_bytes = 0

    with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
        with client.stream("GET", url) as response:
            response.raise_for_status()

            with open(output_path, "wb") as f:
                for chunk in response.iter_bytes(DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
                    hash_obj.update(chunk)
                    file_size_bytes += len(chunk)

            # Capture HTTP headers for versioning info
            http_headers = {
                "last_modified": response.headers.get("last-modified"),
                "etag": response.headers.get("etag"),
                "content_length": response.headers.get("content-length"),
                "date": response.headers.get("date"),
            }

    file_hash = hash_obj.hexdigest()
    logger.info(f"Downloaded {file_size_bytes / 1024 / 1024:.1f} MB to {output_path}")
    logger.info(f"File SHA256: {file_hash}")

    return {
        "url": url,
        "download_timestamp": download_timestamp,
        "file_size_bytes": file_size_bytes,
        "sha256": file_hash,
        "http_headers": http_headers,
    }


def compute_file_hash(file_path: Path | str, algorithm: str = "sha256") -> str:
    """Compute hash of a file for integrity verification.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm (default: sha256)

    Returns:
        Hex-encoded hash string
    """
    file_path = Path(file_path)
    hash_obj = hashlib.new(algorithm)
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            hash_obj.update(chunk)
    return hash_obj.hexdigest()
