"""Settings for a resolution pass.

Settings come from the ``[tool.ideadist]`` table of a project's
``pyproject.toml`` and can be overridden from the command line.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from ideadist.models import DEFAULT_VERSION
from ideadist.resolvers.http import DEFAULT_REPOSITORY_URL

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "ideadist"


@dataclass
class IntelliJSettings:
    """User-facing settings of the IDE dependency.

    Attributes:
        version: IDE version to depend on (e.g., "2023.1").
        plugins: Ids of bundled plugins to add at runtime (e.g., "git4idea").
        project_name: Name of the consuming project, used in descriptor names.
        cache_dir: Directory archives are downloaded and extracted into.
        repository_url: Base URL of the JetBrains index, without channel.
        java_home: JVM ``java.home`` (``<jdk>/jre``); ``../lib`` holds tools.jar.
        download_sources: Whether to look up the sources jar.
        refresh: Download archive and sources again even if cached.
    """

    version: str = DEFAULT_VERSION
    plugins: list[str] = field(default_factory=list)
    project_name: str = "project"
    cache_dir: Path = DEFAULT_CACHE_DIR
    repository_url: str = DEFAULT_REPOSITORY_URL
    java_home: Optional[Path] = None
    download_sources: bool = True
    refresh: bool = False


def load_settings(pyproject: Optional[Path] = None) -> IntelliJSettings:
    """Load settings from a ``pyproject.toml`` file.

    Args:
        pyproject: Path to the file. None or a missing file yields defaults.

    Returns:
        Settings with values from ``[tool.ideadist]`` applied.

    Raises:
        ValueError: If the TOML is invalid or the table has unknown keys.
    """
    settings = IntelliJSettings()
    if pyproject is None or not pyproject.is_file():
        return settings

    settings.project_name = pyproject.resolve().parent.name

    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {pyproject}: {e}") from e

    table: dict[str, Any] = data.get("tool", {}).get("ideadist", {})
    known = {f.name for f in fields(IntelliJSettings)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(
            f"Unknown keys in [tool.ideadist] of {pyproject}: {', '.join(unknown)}"
        )

    for key, value in table.items():
        if key in ("cache_dir", "java_home"):
            value = Path(value).expanduser()
        elif key == "plugins":
            if not isinstance(value, list):
                raise ValueError(f"'plugins' in {pyproject} must be a list")
            value = [str(plugin) for plugin in value]
        setattr(settings, key, value)

    return settings


def companion_library_dir(java_home: Optional[Path] = None) -> Optional[Path]:
    """Return the JDK companion library directory.

    ``java_home`` follows the JVM's ``java.home`` property, which on JDK 8
    is the ``jre`` directory inside the JDK, so its companion libraries live
    in ``<java_home>/../lib``. Without it the ``JAVA_HOME`` environment
    variable is used; that one names the JDK root, whose ``lib`` directory
    is the same place.

    Args:
        java_home: The ``java.home`` of a JDK.

    Returns:
        The directory path (which may not exist), or None if no JDK is known.
    """
    if java_home is not None:
        return java_home.parent / "lib"
    env_home = os.environ.get("JAVA_HOME")
    if not env_home:
        return None
    return Path(env_home) / "lib"

