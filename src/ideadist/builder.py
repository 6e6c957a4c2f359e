"""Builds the synthetic module from a materialized distribution.

The builder runs the scanners in a fixed order and assembles their
artifacts, plus an optional sources artifact, into a ``Module``.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ideadist.errors import NoCompileArtifactsError
from ideadist.models import MODULE_NAME, Artifact, Module, Scope
from ideadist.scanners import (
    BaseScanner,
    BundledPluginScanner,
    CompanionLibraryScanner,
    LibraryScanner,
)

logger = logging.getLogger(__name__)


class ModuleDescriptorBuilder:
    """Scans a distribution directory and classifies its jars.

    Scan order determines artifact order in the descriptor:

    1. ``lib*/*.jar`` under the root, compile scope
    2. ``plugins/<id>/lib/*.jar`` per bundled plugin, runtime scope
    3. ``*tools.jar`` in the JDK companion directory, runtime scope
    4. the sources jar, if one was found, sources scope

    Attributes:
        companion_dir: Host directory holding JDK companion libraries, or None.
    """

    def __init__(self, companion_dir: Optional[Path] = None) -> None:
        self.companion_dir = companion_dir

    def _scanners(
        self, root_directory: Path, plugins: Sequence[str]
    ) -> list[BaseScanner]:
        return [
            LibraryScanner(root_directory),
            BundledPluginScanner(root_directory, plugins),
            CompanionLibraryScanner(self.companion_dir),
        ]

    def build(
        self,
        root_directory: Path,
        plugins: Sequence[str],
        sources_file: Optional[Path],
        version: str,
    ) -> Module:
        """Build the module for one distribution.

        Args:
            root_directory: Extracted distribution directory.
            plugins: Ids of bundled plugins to publish at runtime.
            sources_file: Downloaded sources jar, or None.
            version: IDE version string.

        Returns:
            Module declaring compile, sources and runtime scopes.

        Raises:
            NoCompileArtifactsError: If no compile-scope jar was found.
        """
        module = Module(version=version)
        seen: set[tuple[Scope, str]] = set()

        for scanner in self._scanners(root_directory, plugins):
            artifacts = scanner.scan()
            logger.debug(
                "Found %d jar(s) in %s", len(artifacts), scanner.source_name
            )
            for artifact in artifacts:
                key = (artifact.scope, artifact.name)
                if key in seen:
                    logger.warning(
                        "Skipping %s: another %s artifact is already named '%s'",
                        artifact.source_file,
                        artifact.scope.value,
                        artifact.name,
                    )
                    continue
                seen.add(key)
                module.artifacts.append(artifact)

        if not module.artifacts_in(Scope.COMPILE):
            raise NoCompileArtifactsError(
                f"No jars matching lib*/*.jar found in {root_directory}"
            )

        for artifact in module.artifacts_in(Scope.COMPILE):
            if artifact.source_file.parent != root_directory / "lib":
                logger.debug(
                    "%s is declared but only lib/ is registered as a pattern",
                    artifact.source_file,
                )

        if sources_file is not None:
            module.artifacts.append(
                Artifact(
                    source_file=sources_file,
                    name=MODULE_NAME,
                    type="jar",
                    extension="jar",
                    classifier="sources",
                    scope=Scope.SOURCES,
                )
            )

        logger.info(
            "Built module %s with %d artifact(s)",
            module.coordinates.notation,
            len(module.artifacts),
        )
        return module
