"""Base interface for repository publishers.

Publishers serialize a built module into a descriptor file that a
dependency resolver reads, and report where the module's files live.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ideadist.models import Module


class BasePublisher(ABC):
    """Abstract base class for repository publishers.

    Attributes:
        consumer_id: Name of the consuming project. It is part of the
            descriptor file name so several consumers can share one
            repository root without overwriting each other's descriptor.
    """

    def __init__(self, consumer_id: str) -> None:
        self.consumer_id = consumer_id

    @abstractmethod
    def render(self, module: Module) -> str:
        """Render the module descriptor.

        Args:
            module: Module to describe.

        Returns:
            Descriptor contents as a string.
        """
        ...

    def module_directory(self, module: Module, root_directory: Path) -> Path:
        """Return ``<root>/<group>/<name>/<version>``."""
        return root_directory / module.group / module.name / module.version

    def descriptor_path(self, module: Module, root_directory: Path) -> Path:
        return self.module_directory(module, root_directory) / (
            f"{self.descriptor_prefix}-{self.consumer_id}{self.default_extension}"
        )

    def write(self, module: Module, root_directory: Path) -> Path:
        """Render the descriptor and write it below ``root_directory``.

        An existing descriptor is overwritten.

        Args:
            module: Module to describe.
            root_directory: Repository root.

        Returns:
            Path of the written descriptor.
        """
        path = self.descriptor_path(module, root_directory)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(module), encoding="utf-8")
        return path

    @property
    @abstractmethod
    def descriptor_prefix(self) -> str:
        """Return the descriptor file name prefix (e.g., "ivy")."""
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the descriptor file extension (e.g., ".xml")."""
        ...
