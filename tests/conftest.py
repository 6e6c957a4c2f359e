"""Pytest configuration and fixtures."""

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from ideadist.config import IntelliJSettings
from ideadist.models import DISTRIBUTION_GROUP, DISTRIBUTION_NAME, Coordinates


@pytest.fixture
def release_coordinates() -> Coordinates:
    """Return distribution coordinates for a release version."""
    return Coordinates(DISTRIBUTION_GROUP, DISTRIBUTION_NAME, "2023.1")


@pytest.fixture
def snapshot_coordinates() -> Coordinates:
    """Return distribution coordinates for a snapshot version."""
    return Coordinates(DISTRIBUTION_GROUP, DISTRIBUTION_NAME, "LATEST-EAP-SNAPSHOT")


@pytest.fixture
def release_url() -> str:
    """Return the index directory of the 2023.1 release."""
    return (
        "https://www.jetbrains.com/intellij-repository/releases"
        "/com/jetbrains/intellij/idea/ideaIC/2023.1"
    )


@pytest.fixture
def snapshot_url() -> str:
    """Return the index directory of the LATEST-EAP-SNAPSHOT build."""
    return (
        "https://www.jetbrains.com/intellij-repository/snapshots"
        "/com/jetbrains/intellij/idea/ideaIC/LATEST-EAP-SNAPSHOT"
    )


@pytest.fixture
def distribution_entries() -> dict[str, bytes]:
    """Return the contents of a small IDE distribution archive."""
    return {
        "build.txt": b"IC-231.8109.175",
        "lib/a.jar": b"a",
        "lib/util.jar": b"util",
        "plugins/git4idea/lib/b.jar": b"b",
        "plugins/java/lib/java-impl.jar": b"java",
    }


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing a zip archive with the given entries."""

    def _make(entries: dict[str, bytes], name: str = "ideaIC-2023.1.zip") -> Path:
        archive = tmp_path / "cache" / name
        archive.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive, "w") as zf:
            for member, data in entries.items():
                zf.writestr(member, data)
        return archive

    return _make


@pytest.fixture
def archive_file(make_archive, distribution_entries) -> Path:
    """Return a distribution archive built from ``distribution_entries``."""
    return make_archive(distribution_entries)


@pytest.fixture
def distribution_root(tmp_path: Path, distribution_entries) -> Path:
    """Return an already extracted distribution directory."""
    root = tmp_path / "ideaIC-2023.1"
    for member, data in distribution_entries.items():
        path = root / member
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root


@pytest.fixture
def java_home(tmp_path: Path) -> Path:
    """Return a JDK 8 style java.home whose ../lib holds tools.jar."""
    jdk = tmp_path / "jdk"
    (jdk / "jre").mkdir(parents=True)
    (jdk / "lib").mkdir()
    (jdk / "lib" / "tools.jar").write_bytes(b"tools")
    (jdk / "lib" / "dt.jar").write_bytes(b"dt")
    return jdk / "jre"


@pytest.fixture
def settings(tmp_path: Path, java_home: Path) -> IntelliJSettings:
    """Return settings pointing at temporary directories."""
    return IntelliJSettings(
        version="2023.1",
        plugins=["git4idea"],
        project_name="my-plugin",
        cache_dir=tmp_path / "cache",
        java_home=java_home,
    )
