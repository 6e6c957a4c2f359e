"""Unit tests for the archive extraction cache."""

import zipfile
from pathlib import Path

import pytest

from ideadist.cache import ArchiveCache
from ideadist.errors import ArchiveExtractionError


@pytest.fixture
def cache() -> ArchiveCache:
    """Create an ArchiveCache with the default marker name."""
    return ArchiveCache()


class TestMaterialize:
    """Test extraction and reuse of distribution archives."""

    def test_extracts_next_to_archive(self, cache, archive_file):
        """Test that the archive is extracted into a sibling directory."""
        root = cache.materialize(archive_file)

        assert root == archive_file.parent / "ideaIC-2023.1"
        assert (root / "lib" / "a.jar").read_bytes() == b"a"
        assert (root / "plugins" / "git4idea" / "lib" / "b.jar").is_file()
        assert (root / "markerFile").is_file()
        assert (root / "markerFile").stat().st_size == 0

    def test_second_call_is_idempotent(self, cache, archive_file):
        """Test that a marked directory is returned unchanged."""
        first = cache.materialize(archive_file)
        (first / "lib" / "a.jar").write_bytes(b"edited")

        second = cache.materialize(archive_file)

        assert second == first
        assert (second / "lib" / "a.jar").read_bytes() == b"edited"

    def test_marked_directory_needs_no_archive(self, cache, archive_file):
        """Test that reuse does not touch the archive at all."""
        root = cache.materialize(archive_file)
        archive_file.unlink()

        assert cache.materialize(archive_file) == root

    def test_missing_marker_triggers_full_reextraction(self, cache, archive_file):
        """Test that a directory without marker is wiped and extracted again."""
        root = cache.materialize(archive_file)
        (root / "markerFile").unlink()
        (root / "lib" / "a.jar").write_bytes(b"stale")
        (root / "leftover.txt").write_text("partial")

        cache.materialize(archive_file)

        assert (root / "lib" / "a.jar").read_bytes() == b"a"
        assert not (root / "leftover.txt").exists()
        assert (root / "markerFile").is_file()

    def test_partial_directory_without_marker(self, cache, archive_file):
        """Test that a partial extraction from a crashed run is replaced."""
        root = archive_file.parent / "ideaIC-2023.1"
        (root / "lib").mkdir(parents=True)
        (root / "lib" / "half.jar").write_bytes(b"")

        cache.materialize(archive_file)

        assert not (root / "lib" / "half.jar").exists()
        assert (root / "lib" / "util.jar").is_file()

    def test_missing_archive_raises(self, cache, tmp_path):
        with pytest.raises(FileNotFoundError):
            cache.materialize(tmp_path / "ideaIC-2023.1.zip")

    def test_corrupt_archive_leaves_no_marker(self, cache, tmp_path):
        """Test that a failed extraction is never marked valid."""
        archive = tmp_path / "ideaIC-2023.1.zip"
        archive.write_bytes(b"not a zip file")

        with pytest.raises(ArchiveExtractionError):
            cache.materialize(archive)

        assert not cache.is_materialized(archive)

    def test_rejects_non_zip_archive_without_touching_it(self, cache, tmp_path):
        """Test that an archive not named .zip is never removed or extracted."""
        archive = tmp_path / "ideaIC-2023.1.jar"
        archive.write_bytes(b"jar")

        with pytest.raises(ArchiveExtractionError, match="Not a zip"):
            cache.materialize(archive)

        assert archive.read_bytes() == b"jar"
        assert list(tmp_path.iterdir()) == [archive]

    def test_rejects_members_escaping_target(self, cache, tmp_path):
        archive = tmp_path / "ideaIC-2023.1.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("../evil.jar", b"x")

        with pytest.raises(ArchiveExtractionError):
            cache.materialize(archive)

        assert not (tmp_path / "evil.jar").exists()
        assert not cache.is_materialized(archive)


class TestCacheManagement:
    """Test listing and clearing extracted distributions."""

    def test_directory_for_strips_zip_suffix(self, cache):
        assert cache.directory_for(Path("/c/ideaIC-2023.1.zip")) == Path("/c/ideaIC-2023.1")

    def test_directory_for_rejects_other_suffixes(self, cache):
        with pytest.raises(ArchiveExtractionError):
            cache.directory_for(Path("/c/ideaIC-2023.1.tar.gz"))

    def test_clear_removes_directory(self, cache, archive_file):
        root = cache.materialize(archive_file)

        assert cache.clear(archive_file) is True
        assert not root.exists()
        assert archive_file.exists()
        assert cache.clear(archive_file) is False

    def test_entries_report_state(self, cache, make_archive, distribution_entries):
        """Test that entries list complete and incomplete extractions."""
        complete = make_archive(distribution_entries, name="ideaIC-2023.1.zip")
        incomplete = make_archive(distribution_entries, name="ideaIC-2023.2.zip")
        cache.materialize(complete)
        cache.directory_for(incomplete).mkdir()

        entries = cache.entries(complete.parent)

        assert [e.directory.name for e in entries] == ["ideaIC-2023.1", "ideaIC-2023.2"]
        assert entries[0].complete is True
        assert entries[0].archive_file == complete
        assert entries[0].size_bytes > 0
        assert entries[1].complete is False

    def test_entries_of_missing_root(self, cache, tmp_path):
        assert cache.entries(tmp_path / "missing") == []
