"""Base interface for distribution scanners.

Scanners walk a directory under a fixed set of glob rules and turn the
matching jars into artifacts of a single scope.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from ideadist.models import Artifact, Scope


def collect_files(base: Optional[Path], patterns: Iterable[str]) -> list[Path]:
    """Return the union of files matching any of ``patterns`` under ``base``.

    Args:
        base: Directory to search. A missing directory matches nothing.
        patterns: Glob patterns relative to ``base``.

    Returns:
        Sorted, deduplicated list of matching files.
    """
    if base is None or not base.is_dir():
        return []

    matches: set[Path] = set()
    for pattern in patterns:
        matches.update(p for p in base.glob(pattern) if p.is_file())
    return sorted(matches)


class BaseScanner(ABC):
    """Abstract base class for scanners.

    Attributes:
        base_dir: Directory the glob patterns are evaluated against.
    """

    #: Scope every artifact produced by this scanner is published under
    scope: Scope

    def __init__(self, base_dir: Optional[Path]) -> None:
        self.base_dir = base_dir

    @abstractmethod
    def patterns(self) -> list[str]:
        """Return the glob patterns this scanner includes.

        Returns:
            Patterns relative to ``base_dir``.
        """
        ...

    def scan(self) -> list[Artifact]:
        """Scan ``base_dir`` and build one artifact per matching jar.

        Returns:
            Artifacts in file path order. Empty if nothing matched.
        """
        return [
            Artifact.from_jar(path, self.scope)
            for path in collect_files(self.base_dir, self.patterns())
        ]

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for logging."""
        ...
