"""Exception hierarchy for ideadist.

Everything raised here is fatal for a resolution pass. Best-effort steps
(sources lookup) report failures through ``SourcesLookup`` instead.
"""


class IdeaDistError(Exception):
    """Base class for all ideadist errors."""


class ArchiveFetchError(IdeaDistError):
    """The distribution archive could not be downloaded."""


class ArchiveExtractionError(IdeaDistError):
    """The distribution archive could not be extracted into the cache."""


class NoCompileArtifactsError(IdeaDistError):
    """The materialized distribution contains no compile-scope jars."""


class ConfigurationFrozenError(IdeaDistError):
    """Settings were changed after the resolution pass already ran."""
