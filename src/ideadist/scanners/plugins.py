"""Scanner for plugins bundled with the distribution."""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ideadist.models import Scope
from ideadist.scanners.base import BaseScanner


class BundledPluginScanner(BaseScanner):
    """Collects the jars of selected bundled plugins for runtime use.

    Attributes:
        plugins: Ids of the bundled plugins to include (e.g., "git4idea").
    """

    scope = Scope.RUNTIME

    def __init__(self, base_dir: Optional[Path], plugins: Sequence[str] = ()) -> None:
        super().__init__(base_dir)
        self.plugins = list(plugins)

    def patterns(self) -> list[str]:
        return [f"plugins/{plugin}/lib/*.jar" for plugin in self.plugins]

    @property
    def source_name(self) -> str:
        return "bundled plugins"
