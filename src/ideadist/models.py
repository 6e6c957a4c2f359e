"""Core data models for ideadist.

This module defines the data structures shared by the cache, scanners,
resolvers and publishers: release channels, artifact scopes, module
coordinates, the synthetic module and the repository pattern set handed
to the dependency resolver.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

MODULE_GROUP = "com.jetbrains"
MODULE_NAME = "ideaIC"

DISTRIBUTION_GROUP = "com.jetbrains.intellij.idea"
DISTRIBUTION_NAME = "ideaIC"

DEFAULT_VERSION = "LATEST-EAP-SNAPSHOT"


class Channel(str, Enum):
    """Release stream of the JetBrains artifact index."""

    RELEASES = "releases"
    SNAPSHOTS = "snapshots"

    @classmethod
    def for_version(cls, version: str) -> "Channel":
        """Derive the channel from a version string.

        Args:
            version: IDE version such as "2023.1" or "LATEST-EAP-SNAPSHOT".

        Returns:
            SNAPSHOTS if the version contains "SNAPSHOT", RELEASES otherwise.
        """
        return cls.SNAPSHOTS if "SNAPSHOT" in version else cls.RELEASES


class Scope(str, Enum):
    """Configuration bucket an artifact is published under."""

    COMPILE = "compile"
    RUNTIME = "runtime"
    SOURCES = "sources"


# Order in which configurations are declared on the module
DECLARED_SCOPES: tuple[Scope, ...] = (Scope.COMPILE, Scope.SOURCES, Scope.RUNTIME)


@dataclass(frozen=True)
class Coordinates:
    """Immutable group/name/version triple identifying a component.

    Attributes:
        group: Organisation or group id (e.g., "com.jetbrains.intellij.idea").
        name: Module or artifact id (e.g., "ideaIC").
        version: Version string (e.g., "2023.1").
    """

    group: str
    name: str
    version: str

    @property
    def notation(self) -> str:
        """Return the ``group:name:version`` notation."""
        return f"{self.group}:{self.name}:{self.version}"

    @property
    def path(self) -> str:
        """Return the Maven-layout path of this component's directory."""
        return "/".join([*self.group.split("."), self.name, self.version])


@dataclass(frozen=True)
class Distribution:
    """A fetched and materialized IDE distribution.

    Attributes:
        version: IDE version string.
        channel: Release channel derived from the version.
        archive_file: Path to the downloaded zip archive.
        root_directory: Directory the archive was extracted into.
    """

    version: str
    channel: Channel
    archive_file: Path
    root_directory: Path

    @classmethod
    def create(
        cls, version: str, archive_file: Path, root_directory: Path
    ) -> "Distribution":
        return cls(
            version=version,
            channel=Channel.for_version(version),
            archive_file=archive_file,
            root_directory=root_directory,
        )


@dataclass(frozen=True)
class Artifact:
    """A single file published by the synthetic module.

    Attributes:
        source_file: Physical file on disk.
        name: Artifact name (file base name without extension).
        type: Artifact type, "jar" for everything ideadist publishes.
        extension: File extension without the leading dot.
        classifier: Optional classifier (e.g., "sources").
        scope: Configuration the artifact belongs to.
    """

    source_file: Path
    name: str
    type: str
    extension: str
    classifier: Optional[str]
    scope: Scope

    @classmethod
    def from_jar(cls, path: Path, scope: Scope) -> "Artifact":
        """Create an unclassified jar artifact named after its file.

        Args:
            path: Path to a ``.jar`` file.
            scope: Scope to publish the jar under.

        Returns:
            Artifact whose name is the file's base name without extension.
        """
        return cls(
            source_file=path,
            name=path.stem,
            type="jar",
            extension=path.suffix.lstrip(".") or "jar",
            classifier=None,
            scope=scope,
        )


@dataclass
class Module:
    """The synthetic module describing one IDE distribution.

    Attributes:
        version: IDE version the module was built from.
        artifacts: Published artifacts in scan order.
        group: Module group, always "com.jetbrains".
        name: Module name, always "ideaIC".
        scopes: Declared configurations, always compile/sources/runtime.
    """

    version: str
    artifacts: list[Artifact] = field(default_factory=list)
    group: str = MODULE_GROUP
    name: str = MODULE_NAME
    scopes: tuple[Scope, ...] = DECLARED_SCOPES

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.group, self.name, self.version)

    def artifacts_in(self, scope: Scope) -> list[Artifact]:
        """Return the artifacts published under ``scope``, in order."""
        return [a for a in self.artifacts if a.scope == scope]


@dataclass(frozen=True)
class RepositoryPatternSet:
    """Artifact patterns the resolver registers to find module files on disk.

    Patterns use the ``[artifact]``, ``[classifier]`` and ``[ext]``
    placeholders and are listed in lookup precedence order.

    Attributes:
        url: Root directory of the repository.
        patterns: Ordered artifact patterns.
    """

    url: Path
    patterns: tuple[str, ...]

    def __iter__(self):
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class SourcesFound:
    """A sources artifact was located on disk."""

    path: Path

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True)
class SourcesNotFound:
    """No sources artifact is available, with the reason why."""

    reason: str

    @property
    def path(self) -> None:
        return None

    @property
    def found(self) -> bool:
        return False


SourcesLookup = Union[SourcesFound, SourcesNotFound]


@dataclass(frozen=True)
class DependencyDeclaration:
    """A dependency the consuming project declares on the synthetic module.

    Attributes:
        configuration: Consuming project's configuration (e.g., "compile").
        coordinates: Coordinates of the synthetic module.
        target_configuration: Configuration of the module to depend on.
    """

    configuration: str
    coordinates: Coordinates
    target_configuration: str

    @property
    def notation(self) -> str:
        return f"{self.coordinates.notation}@{self.target_configuration}"


@dataclass
class ResolutionResult:
    """Everything produced by one resolution pass."""

    distribution: Distribution
    module: Module
    descriptor_file: Path
    patterns: RepositoryPatternSet
    dependencies: list[DependencyDeclaration]
    sources: SourcesLookup
