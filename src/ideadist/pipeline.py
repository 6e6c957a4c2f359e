"""Two-phase resolution pipeline for the IDE dependency.

Phase one, ``configure()``, only records settings. Phase two,
``resolve()``, runs fetch, materialize, sources lookup, scan and publish
exactly once, and only if the consuming configuration has no
dependencies of its own yet.
"""

import dataclasses
import logging
from collections.abc import Sequence
from typing import Optional

from ideadist.builder import ModuleDescriptorBuilder
from ideadist.cache import ArchiveCache
from ideadist.config import IntelliJSettings, companion_library_dir
from ideadist.errors import ConfigurationFrozenError
from ideadist.models import (
    DISTRIBUTION_GROUP,
    DISTRIBUTION_NAME,
    Coordinates,
    DependencyDeclaration,
    Distribution,
    Module,
    ResolutionResult,
    Scope,
)
from ideadist.publishers import IvyPublisher
from ideadist.resolvers import (
    ArchiveFetcher,
    BaseSourcesResolver,
    DisabledSourcesResolver,
    SourcesResolver,
)

logger = logging.getLogger(__name__)


def dependency_declarations(module: Module) -> list[DependencyDeclaration]:
    """Return the declarations binding a project to ``module``.

    The project's compile configuration depends on the module's compile
    configuration and its runtime configuration on the module's runtime
    configuration.
    """
    return [
        DependencyDeclaration(
            configuration=scope.value,
            coordinates=module.coordinates,
            target_configuration=scope.value,
        )
        for scope in (Scope.COMPILE, Scope.RUNTIME)
    ]


class IdeaDependencyPipeline:
    """Turns an IDE version into a locally resolvable module.

    Collaborators can be injected for testing; by default they are built
    from the settings.

    Attributes:
        settings: Private copy of the settings of this pass. Frozen once
            ``resolve()`` has run.
    """

    def __init__(
        self,
        settings: IntelliJSettings,
        fetcher: Optional[ArchiveFetcher] = None,
        cache: Optional[ArchiveCache] = None,
        sources_resolver: Optional[BaseSourcesResolver] = None,
        builder: Optional[ModuleDescriptorBuilder] = None,
        publisher: Optional[IvyPublisher] = None,
    ) -> None:
        self.settings = dataclasses.replace(settings, plugins=list(settings.plugins))
        companion_dir = companion_library_dir(settings.java_home)

        self.fetcher = fetcher or ArchiveFetcher(
            settings.cache_dir, settings.repository_url
        )
        self.cache = cache or ArchiveCache()
        if sources_resolver is not None:
            self.sources_resolver = sources_resolver
        elif settings.download_sources:
            self.sources_resolver = SourcesResolver(
                settings.cache_dir, settings.repository_url, refresh=settings.refresh
            )
        else:
            self.sources_resolver = DisabledSourcesResolver()
        self.builder = builder or ModuleDescriptorBuilder(companion_dir)
        self.publisher = publisher or IvyPublisher(
            settings.project_name, companion_dir
        )
        self._result: Optional[ResolutionResult] = None

    @property
    def resolved(self) -> bool:
        return self._result is not None

    def configure(
        self, version: Optional[str] = None, plugins: Optional[Sequence[str]] = None
    ) -> None:
        """Update the version and bundled plugin list.

        Args:
            version: New IDE version, or None to keep the current one.
            plugins: New bundled plugin ids, or None to keep the current ones.

        Raises:
            ConfigurationFrozenError: If the pass has already been resolved.
        """
        if self.resolved:
            raise ConfigurationFrozenError(
                "IDE dependency settings cannot change after resolution"
            )
        if version is not None:
            self.settings.version = version
        if plugins is not None:
            self.settings.plugins = list(plugins)

    async def resolve(
        self, declared_dependencies: Sequence[str] = ()
    ) -> Optional[ResolutionResult]:
        """Run the resolution pass once.

        Args:
            declared_dependencies: Dependencies the consuming configuration
                already declares. If any exist, nothing is done.

        Returns:
            The result of the pass (cached after the first call), or None if
            the configuration already had dependencies.

        Raises:
            ArchiveFetchError: If the archive cannot be downloaded.
            ArchiveExtractionError: If the archive cannot be extracted.
            NoCompileArtifactsError: If the distribution has no compile jars.
            OSError: On filesystem errors.
        """
        if self._result is not None:
            return self._result

        if declared_dependencies:
            logger.info(
                "Configuration already declares %d dependencies, skipping IDE dependency",
                len(declared_dependencies),
            )
            return None

        logger.info("Preparing IDE dependency")
        version = self.settings.version
        plugins = list(self.settings.plugins)
        coordinates = Coordinates(DISTRIBUTION_GROUP, DISTRIBUTION_NAME, version)

        try:
            archive_file = await self.fetcher.fetch(
                coordinates, refresh=self.settings.refresh
            )
            if self.settings.refresh:
                self.cache.clear(archive_file)
            root_directory = self.cache.materialize(archive_file)

            sources = await self.sources_resolver.resolve([coordinates])
        finally:
            await self.fetcher.close()
            await self.sources_resolver.close()

        if not sources.found:
            logger.info("Cannot download IDE sources: %s", sources.reason)

        distribution = Distribution.create(version, archive_file, root_directory)
        module = self.builder.build(root_directory, plugins, sources.path, version)
        patterns = self.publisher.publish(
            module, root_directory, sources_file=sources.path, plugins=plugins
        )

        self._result = ResolutionResult(
            distribution=distribution,
            module=module,
            descriptor_file=self.publisher.descriptor_path(module, root_directory),
            patterns=patterns,
            dependencies=dependency_declarations(module),
            sources=sources,
        )
        return self._result
