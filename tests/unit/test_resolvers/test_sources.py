"""Unit tests for the best-effort sources resolver."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from aiohttp import ClientConnectionError
from aioresponses import aioresponses

from ideadist.models import Coordinates, SourcesFound, SourcesNotFound
from ideadist.resolvers import DisabledSourcesResolver, SourcesResolver


@pytest.fixture
async def resolver(tmp_path: Path) -> AsyncGenerator[SourcesResolver, None]:
    """Return a SourcesResolver caching under a temporary directory."""
    resolver = SourcesResolver(tmp_path / "cache")
    yield resolver
    await resolver.close()


@pytest.fixture
def sources_url(release_url: str) -> str:
    return f"{release_url}/ideaIC-2023.1-sources.jar"


@pytest.mark.asyncio
async def test_resolve_downloads_sources(
    resolver: SourcesResolver, release_coordinates: Coordinates, sources_url: str
) -> None:
    """Test that the sources jar is stored with its classifier in the name."""
    with aioresponses() as mock:
        mock.get(sources_url, body=b"sources")

        lookup = await resolver.resolve([release_coordinates])

    assert isinstance(lookup, SourcesFound)
    assert lookup.path.name == "ideaIC-2023.1-sources.jar"
    assert lookup.path.read_bytes() == b"sources"


@pytest.mark.asyncio
async def test_resolve_snapshot_uses_snapshots_index(
    resolver: SourcesResolver, snapshot_coordinates: Coordinates, snapshot_url: str
) -> None:
    with aioresponses() as mock:
        mock.get(f"{snapshot_url}/ideaIC-LATEST-EAP-SNAPSHOT-sources.jar", body=b"s")

        lookup = await resolver.resolve([snapshot_coordinates])

    assert lookup.found


@pytest.mark.asyncio
async def test_missing_sources_is_not_an_error(
    resolver: SourcesResolver,
    release_coordinates: Coordinates,
    sources_url: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test that a 404 degrades to SourcesNotFound and is logged at INFO."""
    with aioresponses() as mock:
        mock.get(sources_url, status=404)

        with caplog.at_level(logging.INFO, logger="ideadist.resolvers.sources"):
            lookup = await resolver.resolve([release_coordinates])

    assert isinstance(lookup, SourcesNotFound)
    assert lookup.path is None
    assert "no sources artifact" in lookup.reason
    assert all(r.levelno == logging.INFO for r in caplog.records)
    assert "Cannot download sources" in caplog.text


@pytest.mark.asyncio
async def test_network_error_is_swallowed(
    resolver: SourcesResolver, release_coordinates: Coordinates, sources_url: str
) -> None:
    with aioresponses() as mock:
        mock.get(sources_url, exception=ClientConnectionError("unreachable"))

        lookup = await resolver.resolve([release_coordinates])

    assert not lookup.found
    assert "network error" in lookup.reason


@pytest.mark.asyncio
async def test_timeout_is_swallowed(
    resolver: SourcesResolver, release_coordinates: Coordinates, sources_url: str
) -> None:
    with aioresponses() as mock:
        mock.get(sources_url, exception=asyncio.TimeoutError())

        lookup = await resolver.resolve([release_coordinates])

    assert lookup == SourcesNotFound("timed out")


@pytest.mark.asyncio
async def test_unexpected_error_is_swallowed(
    resolver: SourcesResolver, release_coordinates: Coordinates, mocker
) -> None:
    """Test that even a malfunctioning download degrades to not-found."""
    mocker.patch.object(resolver, "_download", side_effect=RuntimeError("boom"))

    lookup = await resolver.resolve([release_coordinates])

    assert lookup == SourcesNotFound("unexpected error: boom")


@pytest.mark.asyncio
async def test_first_component_with_sources_wins(
    resolver: SourcesResolver,
    release_coordinates: Coordinates,
    snapshot_coordinates: Coordinates,
    sources_url: str,
    snapshot_url: str,
) -> None:
    with aioresponses() as mock:
        mock.get(f"{snapshot_url}/ideaIC-LATEST-EAP-SNAPSHOT-sources.jar", status=404)
        mock.get(sources_url, body=b"release sources")

        lookup = await resolver.resolve([snapshot_coordinates, release_coordinates])

    assert lookup.path.read_bytes() == b"release sources"


@pytest.mark.asyncio
async def test_cached_sources_are_reused(
    resolver: SourcesResolver, release_coordinates: Coordinates
) -> None:
    cached = resolver.artifact_path(release_coordinates, "jar", "sources")
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"cached")

    with aioresponses():
        lookup = await resolver.resolve([release_coordinates])

    assert lookup == SourcesFound(cached)


@pytest.mark.asyncio
async def test_no_components(resolver: SourcesResolver) -> None:
    lookup = await resolver.resolve([])
    assert lookup == SourcesNotFound("no resolved components")


@pytest.mark.asyncio
async def test_disabled_resolver(release_coordinates: Coordinates) -> None:
    lookup = await DisabledSourcesResolver().resolve([release_coordinates])
    assert not lookup.found


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [{"status": 404}, {"exception": ClientConnectionError("unreachable")}],
)
async def test_failed_refresh_discards_cached_sources(
    tmp_path: Path,
    release_coordinates: Coordinates,
    sources_url: str,
    failure: dict,
) -> None:
    """Test that a refresh that fails leaves no stale jar for later runs."""
    resolver = SourcesResolver(tmp_path / "cache", refresh=True)
    cached = resolver.artifact_path(release_coordinates, "jar", "sources")
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"stale")

    with aioresponses() as mock:
        mock.get(sources_url, **failure)

        lookup = await resolver.resolve([release_coordinates])
    await resolver.close()

    assert not lookup.found
    assert not cached.exists()


@pytest.mark.asyncio
async def test_refresh_replaces_cached_sources(
    tmp_path: Path, release_coordinates: Coordinates, sources_url: str
) -> None:
    resolver = SourcesResolver(tmp_path / "cache", refresh=True)
    cached = resolver.artifact_path(release_coordinates, "jar", "sources")
    cached.parent.mkdir(parents=True)
    cached.write_bytes(b"stale")

    with aioresponses() as mock:
        mock.get(sources_url, body=b"fresh")

        lookup = await resolver.resolve([release_coordinates])
    await resolver.close()

    assert lookup == SourcesFound(cached)
    assert cached.read_bytes() == b"fresh"
