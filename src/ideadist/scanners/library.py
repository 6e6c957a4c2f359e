"""Scanner for the distribution's own library directories."""

from ideadist.models import Scope
from ideadist.scanners.base import BaseScanner


class LibraryScanner(BaseScanner):
    """Collects the platform jars that plugins compile against.

    Matches jars one level inside every top-level directory whose name
    starts with ``lib`` (``lib/``, ``lib-client/`` and so on).
    """

    scope = Scope.COMPILE

    def patterns(self) -> list[str]:
        return ["lib*/*.jar"]

    @property
    def source_name(self) -> str:
        return "lib"
