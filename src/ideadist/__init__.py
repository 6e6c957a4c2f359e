"""ideadist - IntelliJ IDEA distributions as a local Ivy repository.

This package downloads an IDE distribution archive, extracts it into a
reusable cache and publishes its jars as a synthetic module that a
dependency resolver can consume straight from disk.
"""

__version__ = "0.1.0"

from ideadist.models import (
    Artifact,
    Channel,
    Coordinates,
    Distribution,
    Module,
    RepositoryPatternSet,
    Scope,
)

__all__ = [
    "__version__",
    "Artifact",
    "Channel",
    "Coordinates",
    "Distribution",
    "Module",
    "RepositoryPatternSet",
    "Scope",
]
