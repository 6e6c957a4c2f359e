"""Directory scanners classifying distribution jars into scopes.

Each scanner applies one inclusion rule and tags everything it finds with
a fixed scope.
"""

from ideadist.scanners.base import BaseScanner, collect_files
from ideadist.scanners.companion import CompanionLibraryScanner
from ideadist.scanners.library import LibraryScanner
from ideadist.scanners.plugins import BundledPluginScanner

__all__ = [
    "BaseScanner",
    "BundledPluginScanner",
    "CompanionLibraryScanner",
    "LibraryScanner",
    "collect_files",
]
