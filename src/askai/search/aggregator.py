"""Fan-out retrieval across the knowledge sources."""

import asyncio
import logging

from ..config import SEARCH_TIMEOUT_SECONDS
from .base import SearchProvider
from .models import RetrievalResults, SearchResult, TemplateResult

logger = logging.getLogger(__name__)


class RetrievalAggregator:
    """Queries docs, forum and template sources concurrently.

    Hidden design decisions:
    - Concurrency of the fan-out
    - Per-source timeout and failure isolation
    - Per-source result caps

    A failing, slow or misbehaving source contributes an empty list; the
    aggregator itself never raises.
    """

    def __init__(
        self,
        docs: SearchProvider,
        forum: SearchProvider,
        templates: SearchProvider,
        timeout: float = SEARCH_TIMEOUT_SECONDS
    ):
        """Initialize the aggregator.

        Args:
            docs: Documentation source
            forum: Community forum source
            templates: Template catalog source
            timeout: Per-source timeout in seconds
        """
        self._docs = docs
        self._forum = forum
        self._templates = templates
        self._timeout = timeout

    @property
    def providers(self) -> list[SearchProvider]:
        return [self._docs, self._forum, self._templates]

    async def query(self, text: str) -> RetrievalResults:
        """Query all sources.

        Args:
            text: Free-text query; blank text skips retrieval

        Returns:
            RetrievalResults with capped, normalized lists
        """
        if not text.strip():
            return RetrievalResults()

        docs, forum, templates = await asyncio.gather(
            self._collect(self._docs, text),
            self._collect(self._forum, text),
            self._collect(self._templates, text),
        )

        return RetrievalResults(
            docs=[r for r in docs if isinstance(r, SearchResult)],
            forum=[r for r in forum if isinstance(r, SearchResult)],
            templates=[r for r in templates if isinstance(r, TemplateResult)],
        )

    async def _collect(self, provider: SearchProvider, text: str) -> list[SearchResult]:
        try:
            results = await asyncio.wait_for(provider.search(text), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.debug("%s search timed out after %.1fs", provider.name, self._timeout)
            return []
        except Exception as e:
            logger.debug("%s search failed: %s", provider.name, e)
            return []

        return list(results or [])[:provider.limit]

    async def close(self) -> None:
        """Close every source."""
        for provider in self.providers:
            await provider.close()
