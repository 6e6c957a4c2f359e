"""Artifact patterns locating module files on disk.

Patterns use Ivy's ``[artifact]``, ``[classifier]`` and ``[ext]`` tokens.
The resolver tries them in order, so the list is built in a fixed
precedence.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ideadist.models import Module, RepositoryPatternSet


def build_patterns(
    module: Module,
    root_directory: Path,
    consumer_id: str,
    sources_file: Optional[Path] = None,
    plugins: Sequence[str] = (),
    companion_dir: Optional[Path] = None,
) -> RepositoryPatternSet:
    """Build the ordered pattern set for one published module.

    Order:

    1. ``<sources dir>/[artifact]-<version>-[classifier].[ext]``, only when
       a sources jar exists
    2. ``<root>/<group>/<name>/<version>/[artifact]-<consumer>.[ext]``, which
       also locates the descriptor itself
    3. ``<root>/lib/[artifact].[ext]``
    4. ``<root>/plugins/<id>/lib/[artifact].[ext]`` for each bundled plugin
    5. ``<companion dir>/[artifact].[ext]``, only when the directory is known

    Args:
        module: Published module.
        root_directory: Extracted distribution directory.
        consumer_id: Name of the consuming project.
        sources_file: Downloaded sources jar, or None.
        plugins: Ids of bundled plugins published at runtime.
        companion_dir: JDK companion library directory, or None.

    Returns:
        RepositoryPatternSet rooted at ``root_directory``.
    """
    root = root_directory.as_posix()
    patterns: list[str] = []

    if sources_file is not None:
        patterns.append(
            f"{sources_file.parent.as_posix()}/[artifact]-{module.version}-[classifier].[ext]"
        )

    patterns.append(
        f"{root}/{module.group}/{module.name}/{module.version}/[artifact]-{consumer_id}.[ext]"
    )
    patterns.append(f"{root}/lib/[artifact].[ext]")
    patterns.extend(f"{root}/plugins/{plugin}/lib/[artifact].[ext]" for plugin in plugins)

    if companion_dir is not None:
        patterns.append(f"{companion_dir.as_posix()}/[artifact].[ext]")

    return RepositoryPatternSet(url=root_directory, patterns=tuple(patterns))
