"""Publishers writing module descriptors into the local repository."""

from ideadist.publishers.base import BasePublisher
from ideadist.publishers.ivy import IvyPublisher
from ideadist.publishers.patterns import build_patterns

__all__ = ["BasePublisher", "IvyPublisher", "build_patterns"]
