"""Scanner for libraries shipped with the host Java installation."""

from ideadist.models import Scope
from ideadist.scanners.base import BaseScanner


class CompanionLibraryScanner(BaseScanner):
    """Collects ``tools.jar`` style jars from the JDK's ``lib`` directory.

    The base directory is usually ``<java.home>/../lib``. It is absent on
    modern JDKs, in which case the scan is empty.
    """

    scope = Scope.RUNTIME

    def patterns(self) -> list[str]:
        return ["*tools.jar"]

    @property
    def source_name(self) -> str:
        return "JDK companion libraries"
