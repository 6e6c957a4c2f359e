"""Ivy publisher for the synthetic IDE module.

This module renders the module as an ``ivy.xml`` descriptor using a Jinja2
template and computes the artifact patterns that make the repository
resolvable straight from disk.
"""

import logging
from collections.abc import Sequence
from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from ideadist.models import Module, RepositoryPatternSet
from ideadist.publishers.base import BasePublisher
from ideadist.publishers.patterns import build_patterns

logger = logging.getLogger(__name__)


class IvyPublisher(BasePublisher):
    """Publishes a module as ``ivy-<consumer>.xml``.

    The descriptor declares the compile, sources and runtime
    configurations and lists every artifact with its configuration and,
    where set, its Maven classifier.

    Attributes:
        template: The Jinja2 template to use for rendering.
        companion_dir: JDK companion library directory, or None.
    """

    def __init__(
        self,
        consumer_id: str,
        companion_dir: Optional[Path] = None,
        template_path: Optional[Path] = None,
    ) -> None:
        """Initialize the Ivy publisher.

        Args:
            consumer_id: Name of the consuming project.
            companion_dir: JDK companion library directory, or None.
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.
        """
        super().__init__(consumer_id)
        self.companion_dir = companion_dir
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=True,
                keep_trailing_newline=True,
            )
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        template_content = (
            files("ideadist.templates")
            .joinpath("ivy.xml.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(autoescape=True, keep_trailing_newline=True)
        return env.from_string(template_content)

    def render(self, module: Module) -> str:
        return self.template.render(module=module)

    def publish(
        self,
        module: Module,
        root_directory: Path,
        sources_file: Optional[Path] = None,
        plugins: Sequence[str] = (),
    ) -> RepositoryPatternSet:
        """Write the descriptor and return the artifact patterns.

        Safe to call repeatedly; the descriptor is overwritten each time.

        Args:
            module: Module to publish.
            root_directory: Extracted distribution directory.
            sources_file: Downloaded sources jar, or None.
            plugins: Ids of bundled plugins published at runtime.

        Returns:
            Pattern set the resolver must register, in precedence order.
        """
        descriptor = self.write(module, root_directory)
        logger.info("Wrote module descriptor %s", descriptor)

        return build_patterns(
            module,
            root_directory,
            self.consumer_id,
            sources_file=sources_file,
            plugins=plugins,
            companion_dir=self.companion_dir,
        )

    @property
    def descriptor_prefix(self) -> str:
        return "ivy"

    @property
    def default_extension(self) -> str:
        return ".xml"
