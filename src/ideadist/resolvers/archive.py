"""Downloads IDE distribution archives from the JetBrains index.

The index is selected by channel: versions containing "SNAPSHOT" come from
``.../intellij-repository/snapshots``, everything else from
``.../intellij-repository/releases``.
"""

import asyncio
import logging
from pathlib import Path

import aiohttp

from ideadist.errors import ArchiveFetchError
from ideadist.models import Coordinates
from ideadist.resolvers.http import HttpResolver

logger = logging.getLogger(__name__)


class ArchiveFetcher(HttpResolver):
    """Fetches ``<name>-<version>.zip`` for a set of coordinates.

    Archives already present in the cache root are reused. Pass
    ``refresh=True`` to download again, e.g. to pick up a newer build of a
    snapshot version.

    Failures are fatal: a resolution pass cannot continue without the
    archive.
    """

    EXTENSION = "zip"

    async def fetch(self, coordinates: Coordinates, refresh: bool = False) -> Path:
        """Return a local copy of the distribution archive.

        Args:
            coordinates: Distribution coordinates
                (e.g., com.jetbrains.intellij.idea:ideaIC:2023.1).
            refresh: Download even if the archive is already cached.

        Returns:
            Path to the archive inside the cache root.

        Raises:
            ArchiveFetchError: If the archive cannot be downloaded.
        """
        destination = self.artifact_path(coordinates, self.EXTENSION)
        if destination.is_file() and not refresh:
            logger.debug("Using cached archive %s", destination)
            return destination

        url = self.artifact_url(coordinates, self.EXTENSION)
        logger.info("Downloading %s", coordinates.notation)

        try:
            status = await self._download(url, destination)
        except aiohttp.ClientError as e:
            raise ArchiveFetchError(
                f"Network error downloading {coordinates.notation}: {e}"
            ) from e
        except asyncio.TimeoutError as e:
            raise ArchiveFetchError(
                f"Timed out downloading {coordinates.notation} from {url}"
            ) from e

        if status == 404:
            raise ArchiveFetchError(f"{coordinates.notation} not found at {url}")
        if status != 200:
            raise ArchiveFetchError(
                f"Index returned status {status} for {coordinates.notation} ({url})"
            )

        return destination
