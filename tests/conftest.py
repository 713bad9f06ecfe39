"""Pytest configuration and fixtures for jaspardata tests."""

from pathlib import Path

import pytest

from jaspardata.resolver import default_catalog


@pytest.fixture
def sample_metadata() -> str:
    """Sample release metadata CSV content for testing."""
    return """Title,Description,SourceType,SourceUrl,SourceVersion
JASPAR2020,JASPAR 2020 release,SQL,https://example.org/download/JASPAR2020.sql.gz,2020
JASPAR2024,JASPAR 2024 release,SQL,https://example.org/download/JASPAR2024.sql.gz,2024
JASPAR2022,JASPAR 2022 release,SQL,https://example.org/download/JASPAR2022.sql.gz,2022
"""


@pytest.fixture
def metadata_path(tmp_path: Path, sample_metadata: str) -> Path:
    """Sample metadata written to a CSV file."""
    path = tmp_path / "metadata.csv"
    path.write_text(sample_metadata)
    return path


@pytest.fixture
def cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated cache directory used as the default cache location."""
    cache_dir = tmp_path / "cache"
    monkeypatch.delenv("JASPARDATA_CACHE_DIR", raising=False)
    monkeypatch.setattr("jaspardata.cache.registry.DEFAULT_CACHE_DIR", cache_dir)
    return cache_dir


@pytest.fixture(autouse=True)
def _reset_default_catalog():
    """Drop the lazily loaded bundled catalog between tests."""
    default_catalog.cache_clear()
    yield
    default_catalog.cache_clear()
