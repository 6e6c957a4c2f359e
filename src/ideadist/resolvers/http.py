import logging
from pathlib import Path
from typing import Optional

import aiohttp

from ideadist.models import Channel, Coordinates

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY_URL = "https://www.jetbrains.com/intellij-repository"


class HttpResolver:
    """Base class for clients of the JetBrains artifact index.

    Manages a shared aiohttp.ClientSession for connection pooling and reuse,
    and knows how to lay out artifacts in a local cache root that mirrors
    the index's group/name/version structure.

    Attributes:
        cache_root: Local directory downloads are stored under.
        repository_url: Base URL of the index, without the channel suffix.
    """

    CHUNK_SIZE = 1024 * 1024

    def __init__(
        self,
        cache_root: Path,
        repository_url: str = DEFAULT_REPOSITORY_URL,
        timeout: Optional[aiohttp.ClientTimeout] = None,
    ) -> None:
        self.cache_root = cache_root
        self.repository_url = repository_url.rstrip("/")
        self._timeout = timeout or aiohttp.ClientTimeout(
            total=None, sock_connect=30, sock_read=120
        )
        self._session: Optional[aiohttp.ClientSession] = None

    def index_url(self, channel: Channel) -> str:
        """Return the URL of the index serving ``channel``."""
        return f"{self.repository_url}/{channel.value}"

    def artifact_url(
        self,
        coordinates: Coordinates,
        extension: str,
        classifier: Optional[str] = None,
    ) -> str:
        """Return the index URL of one artifact file.

        Args:
            coordinates: Component coordinates.
            extension: File extension (e.g., "zip").
            classifier: Optional classifier (e.g., "sources").

        Returns:
            Absolute URL in Maven layout on the channel-selected index.
        """
        channel = Channel.for_version(coordinates.version)
        file_name = self.artifact_file_name(coordinates, extension, classifier)
        return f"{self.index_url(channel)}/{coordinates.path}/{file_name}"

    def artifact_path(
        self,
        coordinates: Coordinates,
        extension: str,
        classifier: Optional[str] = None,
    ) -> Path:
        """Return where an artifact is stored below ``cache_root``."""
        file_name = self.artifact_file_name(coordinates, extension, classifier)
        return (
            self.cache_root
            / coordinates.group
            / coordinates.name
            / coordinates.version
            / file_name
        )

    @staticmethod
    def artifact_file_name(
        coordinates: Coordinates, extension: str, classifier: Optional[str] = None
    ) -> str:
        suffix = f"-{classifier}" if classifier else ""
        return f"{coordinates.name}-{coordinates.version}{suffix}.{extension}"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session.

        Returns:
            The shared aiohttp ClientSession.
        """
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        """Create a new aiohttp.ClientSession.

        Subclasses can override this to provide custom session configuration.

        Returns:
            A new aiohttp.ClientSession instance.
        """
        return aiohttp.ClientSession(timeout=self._timeout)

    async def _download(self, url: str, destination: Path) -> int:
        """Stream ``url`` into ``destination``.

        The body is written to a ``.part`` file first and renamed on
        completion, so ``destination`` never holds a truncated download.

        Args:
            url: URL to fetch.
            destination: Final path of the downloaded file.

        Returns:
            HTTP status code. The file is written only for status 200.

        Raises:
            aiohttp.ClientError: On network errors.
            asyncio.TimeoutError: If the server stops responding.
        """
        logger.debug("Downloading %s", url)
        session = await self._get_session()
        async with session.get(url) as response:
            if response.status != 200:
                return response.status

            destination.parent.mkdir(parents=True, exist_ok=True)
            partial = destination.with_name(destination.name + ".part")
            try:
                with open(partial, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        f.write(chunk)
                partial.replace(destination)
            finally:
                partial.unlink(missing_ok=True)
            return response.status

    async def close(self) -> None:
        """Close the aiohttp session.

        Should be called when done using the resolver to release resources.
        """
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HttpResolver":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
