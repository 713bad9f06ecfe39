"""Tests for release catalog loading and lookup."""

from pathlib import Path

import pytest

from jaspardata.catalog.loader import (
    Catalog,
    CatalogEntry,
    list_releases,
    load_catalog,
    resolve_release,
)
from jaspardata.constants import METADATA_PATH
from jaspardata.errors import (
    AmbiguousReleaseError,
    NotFoundError,
    SchemaError,
    UnknownReleaseError,
)


def _catalog(*release_ids: str) -> Catalog:
    return Catalog(
        entries=tuple(
            CatalogEntry(release_id=r, source_url=f"https://example.org/{r}.sql.gz")
            for r in release_ids
        )
    )


class TestLoadCatalog:
    """Tests for catalog loading."""

    def test_loads_sample_metadata(self, metadata_path: Path) -> None:
        """Should load one entry per row, in file order."""
        catalog = load_catalog(metadata_path)

        assert len(catalog) == 3
        assert [e.release_id for e in catalog.entries] == [
            "JASPAR2020",
            "JASPAR2024",
            "JASPAR2022",
        ]
        assert catalog.entries[0].source_url == "https://example.org/download/JASPAR2020.sql.gz"
        assert catalog.source_path == metadata_path

    def test_keeps_extra_columns(self, metadata_path: Path) -> None:
        """Non-required columns should be carried on each entry."""
        catalog = load_catalog(metadata_path)

        extra = catalog.entries[1].extra
        assert extra["SourceVersion"] == "2024"
        assert "Title" not in extra
        assert "SourceUrl" not in extra

    def test_extra_columns_are_read_only(self, metadata_path: Path) -> None:
        """Extra columns should not be mutable after loading."""
        catalog = load_catalog(metadata_path)

        with pytest.raises(TypeError):
            catalog.entries[0].extra["SourceVersion"] = "1999"  # type: ignore[index]

        assert catalog.entries[0].extra["SourceVersion"] == "2020"

    def test_missing_file(self) -> None:
        """Should raise NotFoundError for a nonexistent path."""
        with pytest.raises(NotFoundError):
            load_catalog("/nonexistent/path.csv")

    def test_not_found_is_file_not_found(self) -> None:
        """NotFoundError should also be catchable as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_catalog("/nonexistent/path.csv")

    def test_missing_source_column(self, tmp_path: Path) -> None:
        """Should raise SchemaError naming the missing column."""
        path = tmp_path / "metadata.csv"
        path.write_text("Title,Description\nJASPAR2024,release\n")

        with pytest.raises(SchemaError, match="SourceUrl") as exc_info:
            load_catalog(path)

        assert exc_info.value.missing_columns == ("SourceUrl",)

    def test_missing_both_columns(self, tmp_path: Path) -> None:
        """Should list every missing column."""
        path = tmp_path / "metadata.csv"
        path.write_text("Description\nrelease\n")

        with pytest.raises(SchemaError) as exc_info:
            load_catalog(path)

        assert exc_info.value.missing_columns == ("Title", "SourceUrl")

    def test_empty_file_is_schema_error(self, tmp_path: Path) -> None:
        """A file without a header has no required columns."""
        path = tmp_path / "metadata.csv"
        path.write_text("")

        with pytest.raises(SchemaError):
            load_catalog(path)

    def test_header_only_is_empty_catalog(self, tmp_path: Path) -> None:
        """A table with no rows is legal."""
        path = tmp_path / "metadata.csv"
        path.write_text("Title,SourceUrl\n")

        catalog = load_catalog(path)

        assert len(catalog) == 0
        assert list_releases(catalog) == []

    def test_custom_column_names(self, tmp_path: Path) -> None:
        """Should honour alternative column names."""
        path = tmp_path / "releases.csv"
        path.write_text("name,url\nv1,https://example.org/v1\n")

        catalog = load_catalog(path, release_column="name", source_column="url")

        assert catalog.resolve("v1") == "https://example.org/v1"

    def test_values_are_strings(self, tmp_path: Path) -> None:
        """Numeric-looking identifiers should stay strings."""
        path = tmp_path / "metadata.csv"
        path.write_text("Title,SourceUrl\n2024,https://example.org/2024\n")

        catalog = load_catalog(path)

        assert catalog.entries[0].release_id == "2024"

    def test_bundled_metadata(self) -> None:
        """The metadata shipped with the package should load."""
        catalog = load_catalog(METADATA_PATH)

        assert len(catalog) > 0
        assert "JASPAR2024" in catalog.list_releases()


class TestResolveRelease:
    """Tests for release resolution."""

    def test_resolves_each_release(self, metadata_path: Path) -> None:
        """Every release should resolve to its own URL."""
        catalog = load_catalog(metadata_path)

        for entry in catalog.entries:
            assert resolve_release(catalog, entry.release_id) == entry.source_url

    def test_unknown_release(self, metadata_path: Path) -> None:
        """Unknown releases should raise UnknownReleaseError."""
        catalog = load_catalog(metadata_path)

        with pytest.raises(UnknownReleaseError, match="get_available_releases") as exc_info:
            resolve_release(catalog, "does-not-exist")

        assert exc_info.value.release_id == "does-not-exist"
        assert exc_info.value.available == ("JASPAR2024", "JASPAR2022", "JASPAR2020")

    def test_match_is_case_sensitive(self, metadata_path: Path) -> None:
        """Should not normalise case."""
        catalog = load_catalog(metadata_path)

        with pytest.raises(UnknownReleaseError):
            resolve_release(catalog, "jaspar2024")

    def test_no_partial_match(self, metadata_path: Path) -> None:
        """Should not match on a prefix."""
        catalog = load_catalog(metadata_path)

        with pytest.raises(UnknownReleaseError):
            resolve_release(catalog, "JASPAR")

    def test_duplicate_release(self) -> None:
        """Duplicated releases should raise AmbiguousReleaseError."""
        catalog = _catalog("X", "Y", "X")

        with pytest.raises(AmbiguousReleaseError) as exc_info:
            resolve_release(catalog, "X")

        assert exc_info.value.count == 2

    def test_duplicate_does_not_affect_other_releases(self) -> None:
        """Other releases should still resolve."""
        catalog = _catalog("X", "Y", "X")

        assert resolve_release(catalog, "Y") == "https://example.org/Y.sql.gz"

    def test_empty_release_id(self, metadata_path: Path) -> None:
        """Should reject an empty identifier."""
        catalog = load_catalog(metadata_path)

        with pytest.raises(ValueError, match="non-empty"):
            resolve_release(catalog, "")

    def test_empty_catalog(self) -> None:
        """Nothing resolves in an empty catalog."""
        with pytest.raises(UnknownReleaseError):
            resolve_release(Catalog(), "JASPAR2024")


class TestListReleases:
    """Tests for release ordering."""

    def test_numeric_descending(self) -> None:
        """Year-coded releases should be listed newest first."""
        catalog = _catalog("JASPAR2020", "JASPAR2022", "JASPAR2024")

        assert list_releases(catalog) == ["JASPAR2024", "JASPAR2022", "JASPAR2020"]

    def test_non_numeric_reverse_lexicographic(self) -> None:
        """Releases without digits should fall back to reverse lexicographic order."""
        catalog = _catalog("beta", "alpha", "gamma")

        assert list_releases(catalog) == ["gamma", "beta", "alpha"]

    def test_mixed_falls_back_to_lexicographic(self) -> None:
        """One release without digits disables numeric ordering."""
        catalog = _catalog("v10", "v9", "dev")

        assert list_releases(catalog) == ["v9", "v10", "dev"]

    def test_numeric_not_lexicographic(self) -> None:
        """Numeric ordering should compare integers, not strings."""
        catalog = _catalog("r9", "r10", "r100")

        assert list_releases(catalog) == ["r100", "r10", "r9"]

    def test_all_digits_are_joined(self) -> None:
        """Digits are concatenated across the identifier."""
        catalog = _catalog("v1.2", "v1.10")

        # "v1.2" -> 12, "v1.10" -> 110
        assert list_releases(catalog) == ["v1.10", "v1.2"]

    def test_distinct(self) -> None:
        """Duplicates should be listed once."""
        catalog = _catalog("JASPAR2022", "JASPAR2024", "JASPAR2022")

        assert list_releases(catalog) == ["JASPAR2024", "JASPAR2022"]

    def test_ties_keep_catalog_order(self) -> None:
        """Releases with equal numbers keep their order of appearance."""
        catalog = _catalog("b2024", "a2024", "c2020")

        assert list_releases(catalog) == ["b2024", "a2024", "c2020"]

    def test_method_matches_function(self, metadata_path: Path) -> None:
        """Catalog.list_releases should match list_releases."""
        catalog = load_catalog(metadata_path)

        assert catalog.list_releases() == list_releases(catalog)
