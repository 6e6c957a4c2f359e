"""Resolvers fetching artifacts from the JetBrains index.

This module provides the archive fetcher, which fails hard, and the
sources resolver, which degrades to "no sources".
"""

from ideadist.resolvers.archive import ArchiveFetcher
from ideadist.resolvers.base import BaseSourcesResolver, DisabledSourcesResolver
from ideadist.resolvers.http import DEFAULT_REPOSITORY_URL, HttpResolver
from ideadist.resolvers.sources import SourcesResolver

__all__ = [
    "DEFAULT_REPOSITORY_URL",
    "ArchiveFetcher",
    "BaseSourcesResolver",
    "DisabledSourcesResolver",
    "HttpResolver",
    "SourcesResolver",
]
