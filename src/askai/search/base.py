from abc import ABC, abstractmethod

from .models import SearchResult


class SearchProvider(ABC):
    """Abstract base class for external knowledge sources.

    This module hides the design decision of how a source is queried
    (HTML scraping, JSON API, canned data in tests).

    Contract: ``search`` returns at most ``limit`` results and returns an
    empty list instead of raising on any internal failure.
    """

    limit: int = 3

    @property
    @abstractmethod
    def name(self) -> str:
        """Short source identifier ('docs', 'forum', 'templates')."""

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        """Search the source.

        Args:
            query: Free-text query

        Returns:
            Bounded list of results, empty on failure
        """

    async def close(self) -> None:
        """Release any open connections."""
        return None
