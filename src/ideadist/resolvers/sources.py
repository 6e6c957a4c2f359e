"""Best-effort resolver for IDE sources jars.

Looks for the ``sources`` classified artifact of each resolved component on
the JetBrains index. Every failure degrades to "no sources" and is logged
at INFO, so a missing or unreachable sources jar never breaks resolution.
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import aiohttp

from ideadist.models import Coordinates, SourcesFound, SourcesLookup, SourcesNotFound
from ideadist.resolvers.base import BaseSourcesResolver
from ideadist.resolvers.http import HttpResolver

logger = logging.getLogger(__name__)


class SourcesResolver(HttpResolver, BaseSourcesResolver):
    """Downloads ``<name>-<version>-sources.jar`` next to the archive.

    The downloaded file keeps the ``<artifact>-<version>-<classifier>.<ext>``
    naming so the resolver can locate it through a plain artifact pattern.
    A sources jar already present in the cache root is reused unless
    ``refresh`` is set.
    """

    CLASSIFIER = "sources"
    EXTENSION = "jar"

    def __init__(self, *args, refresh: bool = False, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.refresh = refresh

    @property
    def name(self) -> str:
        return "JetBrains index"

    async def resolve(self, components: Sequence[Coordinates]) -> SourcesLookup:
        """Return the sources jar of the first component that has one.

        Args:
            components: Coordinates resolved earlier in the same pass.

        Returns:
            SourcesFound with the local file, or SourcesNotFound.
        """
        if not components:
            return SourcesNotFound("no resolved components")

        reason = "no sources artifact"
        for component in components:
            try:
                path = await self._resolve_component(component)
            except aiohttp.ClientError as e:
                reason = f"network error: {e}"
            except asyncio.TimeoutError:
                reason = "timed out"
            except Exception as e:
                reason = f"unexpected error: {e}"
            else:
                if path is not None:
                    return SourcesFound(path)
                reason = f"no sources artifact for {component.notation}"

            logger.info(
                "Cannot download sources for %s: %s", component.notation, reason
            )

        return SourcesNotFound(reason)

    async def _resolve_component(self, component: Coordinates) -> Optional[Path]:
        """Fetch the sources jar of one component.

        Returns:
            Path to the local sources jar, or None if the index has none.
        """
        destination = self.artifact_path(component, self.EXTENSION, self.CLASSIFIER)
        if destination.is_file() and not self.refresh:
            logger.debug("Using cached sources %s", destination)
            return destination
        # Only a successful download may leave a sources jar behind
        destination.unlink(missing_ok=True)

        url = self.artifact_url(component, self.EXTENSION, self.CLASSIFIER)
        status = await self._download(url, destination)
        if status != 200:
            logger.debug("Sources lookup at %s returned status %d", url, status)
            return None
        return destination
