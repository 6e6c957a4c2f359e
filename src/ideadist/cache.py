"""Marker-guarded extraction cache for distribution archives.

This module materializes a distribution zip into a sibling directory and
reuses it on later runs. A directory is trusted only when its marker file
exists; anything else is wiped and extracted again.
"""

import logging
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path

from ideadist.errors import ArchiveExtractionError

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A materialized distribution directory found under a cache root.

    Attributes:
        archive_file: The archive the directory was extracted from.
        directory: The extracted distribution directory.
        complete: True if the marker file exists.
        size_bytes: Total size of the files inside the directory.
    """

    archive_file: Path
    directory: Path
    complete: bool
    size_bytes: int


class ArchiveCache:
    """Extracts distribution archives into stable, reusable directories.

    The cache directory for ``ideaIC-2023.1.zip`` is ``ideaIC-2023.1`` next
    to the archive. The marker file is written only after a complete
    extraction, so an interrupted run is retried from scratch.

    Attributes:
        marker_name: File name of the completion marker.
    """

    MARKER_NAME = "markerFile"
    ARCHIVE_SUFFIX = ".zip"

    def __init__(self, marker_name: str = MARKER_NAME) -> None:
        self.marker_name = marker_name

    def directory_for(self, archive_file: Path) -> Path:
        """Return the cache directory that belongs to ``archive_file``.

        Args:
            archive_file: Path to the distribution archive.

        Returns:
            Sibling directory named after the archive without ``.zip``.

        Raises:
            ArchiveExtractionError: If the archive name does not end in ``.zip``.
        """
        name = archive_file.name
        if not name.endswith(self.ARCHIVE_SUFFIX) or name == self.ARCHIVE_SUFFIX:
            raise ArchiveExtractionError(
                f"Not a zip distribution archive: {archive_file}"
            )
        return archive_file.parent / name[: -len(self.ARCHIVE_SUFFIX)]


    def marker_for(self, archive_file: Path) -> Path:
        return self.directory_for(archive_file) / self.marker_name

    def is_materialized(self, archive_file: Path) -> bool:
        """Check whether ``archive_file`` has a complete cache directory."""
        return self.marker_for(archive_file).is_file()

    def materialize(self, archive_file: Path) -> Path:
        """Extract the archive unless a complete extraction already exists.

        Args:
            archive_file: Path to the distribution archive.

        Returns:
            Root directory of the extracted distribution.

        Raises:
            FileNotFoundError: If extraction is needed and the archive is missing.
            ArchiveExtractionError: If the archive cannot be extracted safely.
            OSError: On filesystem errors while writing the cache.
        """
        cache_dir = self.directory_for(archive_file)
        marker = cache_dir / self.marker_name

        if marker.is_file():
            logger.debug("Reusing extracted distribution at %s", cache_dir)
            return cache_dir

        if not archive_file.is_file():
            raise FileNotFoundError(f"Distribution archive not found: {archive_file}")

        if cache_dir.exists():
            logger.info("Discarding incomplete extraction at %s", cache_dir)
            shutil.rmtree(cache_dir)
        cache_dir.mkdir(parents=True)

        logger.info("Unzipping %s into %s", archive_file.name, cache_dir)
        self._extract(archive_file, cache_dir)

        # Last step: only a finished extraction is ever marked valid
        marker.touch()
        return cache_dir

    def _extract(self, archive_file: Path, target: Path) -> None:
        """Extract every member of ``archive_file`` into ``target``."""
        resolved_target = target.resolve()
        try:
            with zipfile.ZipFile(archive_file) as archive:
                for member in archive.namelist():
                    destination = (resolved_target / member).resolve()
                    if not destination.is_relative_to(resolved_target):
                        raise ArchiveExtractionError(
                            f"Archive member '{member}' escapes {target}"
                        )
                archive.extractall(target)
        except zipfile.BadZipFile as e:
            raise ArchiveExtractionError(
                f"Invalid distribution archive {archive_file}: {e}"
            ) from e

    def clear(self, archive_file: Path) -> bool:
        """Delete the cache directory of ``archive_file``.

        Args:
            archive_file: Path to the distribution archive.

        Returns:
            True if a directory was removed, False if there was none.
        """
        cache_dir = self.directory_for(archive_file)
        if not cache_dir.exists():
            return False
        shutil.rmtree(cache_dir)
        return True

    def entries(self, cache_root: Path) -> list[CacheEntry]:
        """List extracted distributions below ``cache_root``.

        A directory counts as an extracted distribution when it sits next to
        an archive of the same name.

        Args:
            cache_root: Directory to search recursively.

        Returns:
            Entries sorted by directory path.
        """
        if not cache_root.is_dir():
            return []

        entries = []
        for archive_file in sorted(cache_root.rglob(f"*{self.ARCHIVE_SUFFIX}")):
            cache_dir = self.directory_for(archive_file)
            if not cache_dir.is_dir():
                continue
            size_bytes = sum(
                f.stat().st_size for f in cache_dir.rglob("*") if f.is_file()
            )
            entries.append(
                CacheEntry(
                    archive_file=archive_file,
                    directory=cache_dir,
                    complete=self.is_materialized(archive_file),
                    size_bytes=size_bytes,
                )
            )
        return entries
