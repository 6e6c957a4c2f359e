"""Base interface for sources resolvers.

Sources are a convenience: a resolver reports what it found through an
explicit ``SourcesLookup`` result and never raises.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ideadist.models import Coordinates, SourcesLookup, SourcesNotFound


class BaseSourcesResolver(ABC):
    """Abstract base class for sources resolvers."""

    @abstractmethod
    async def resolve(self, components: Sequence[Coordinates]) -> SourcesLookup:
        """Look up the sources artifact of already-resolved components.

        Args:
            components: Coordinates resolved earlier in the same pass.

        Returns:
            SourcesFound for the first component with sources, otherwise
            SourcesNotFound with the reason.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the resolver name for logging/debugging."""
        ...

    async def close(self) -> None:
        """Release any resources held by the resolver."""


class DisabledSourcesResolver(BaseSourcesResolver):
    """Resolver used when sources lookup is switched off."""

    async def resolve(self, components: Sequence[Coordinates]) -> SourcesLookup:
        return SourcesNotFound("sources download disabled")

    @property
    def name(self) -> str:
        return "disabled"
