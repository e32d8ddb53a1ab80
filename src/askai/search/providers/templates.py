"""Workflow template catalog search."""

import asyncio
import html
import logging
import re
import time
from urllib.parse import unquote

from ...config import (
    DEFAULT_TEMPLATE_IMPORT_BASE_URL,
    TEMPLATE_ENRICH_LIMIT,
    TEMPLATE_ENRICH_TIMEOUT_SECONDS,
    TEMPLATE_RESULT_LIMIT,
    TEMPLATE_SEARCH_BUDGET_SHARE,
)
from ..base import SearchProvider
from ..models import TemplateResult
from .http import HtmlFetcher

logger = logging.getLogger(__name__)

_WORKFLOW_LINK = re.compile(
    r'href="(?:https?://n8n\.io)?/workflows/(\d+)-([^"/]+)[^"]*"',
    re.IGNORECASE,
)
_META_DESCRIPTION = re.compile(
    r'<meta[^>]+(?:property|name)="(?:og:description|description)"[^>]+content="([^"]*)"',
    re.IGNORECASE,
)


def import_url_for(template_id: str, base_url: str = DEFAULT_TEMPLATE_IMPORT_BASE_URL) -> str:
    """Derive the import link for a template id."""
    return f"{base_url.rstrip('/')}/{template_id}/setup"


def parse_template_results(
    page: str,
    catalog_url: str,
    import_base_url: str = DEFAULT_TEMPLATE_IMPORT_BASE_URL,
    limit: int = TEMPLATE_RESULT_LIMIT
) -> list[TemplateResult]:
    """Extract unique templates from a catalog search page."""
    results: list[TemplateResult] = []
    seen: set[str] = set()
    for match in _WORKFLOW_LINK.finditer(page):
        if len(results) >= limit:
            break
        template_id, slug = match.group(1), match.group(2)
        if template_id in seen:
            continue
        seen.add(template_id)
        results.append(TemplateResult(
            id=template_id,
            title=unquote(slug).replace("-", " ").strip(),
            url=f"{catalog_url}/{template_id}-{slug}/",
            importUrl=import_url_for(template_id, import_base_url),
        ))
    return results


def parse_summary(page: str) -> str | None:
    """Read the description meta tag of a template page."""
    match = _META_DESCRIPTION.search(page)
    if not match:
        return None
    summary = html.unescape(match.group(1)).strip()
    return summary or None


class TemplateSearchProvider(SearchProvider):
    """Searches the public workflow template catalog.

    The first few results are enriched with a summary read from their
    page metadata. Enrichment is best effort and runs under its own
    deadline: when it is slow the catalog results are returned without
    summaries.
    """

    def __init__(
        self,
        fetcher: HtmlFetcher,
        catalog_url: str = "https://n8n.io/workflows",
        import_base_url: str = DEFAULT_TEMPLATE_IMPORT_BASE_URL,
        limit: int = TEMPLATE_RESULT_LIMIT,
        enrich_limit: int = TEMPLATE_ENRICH_LIMIT,
        enrich_timeout: float = TEMPLATE_ENRICH_TIMEOUT_SECONDS,
        budget: float | None = None
    ):
        """Initialize the provider.

        Args:
            fetcher: Page fetcher
            catalog_url: Catalog search page
            import_base_url: Base URL for derived import links
            limit: Maximum number of templates
            enrich_limit: How many leading results get a summary
            enrich_timeout: Deadline for the summary fetches, in seconds
            budget: Time the caller allows for a whole search (None = no
                bound). Enrichment is cut short so the search finishes
                within its share of this budget.
        """
        self._fetcher = fetcher
        self._catalog_url = catalog_url.rstrip("/")
        self._import_base_url = import_base_url
        self.limit = limit
        self._enrich_limit = enrich_limit
        self._enrich_timeout = enrich_timeout
        self._budget = budget

    @property
    def name(self) -> str:
        return "templates"

    async def search(self, query: str) -> list[TemplateResult]:
        started = time.monotonic()
        page = await self._fetcher.fetch(f"{self._catalog_url}/", params={"q": query})
        results = parse_template_results(page, self._catalog_url, self._import_base_url, self.limit)
        if not results or self._enrich_limit <= 0:
            return results

        deadline = self._enrich_timeout
        if self._budget is not None:
            remaining = self._budget * TEMPLATE_SEARCH_BUDGET_SHARE - (time.monotonic() - started)
            deadline = min(deadline, remaining)
        if deadline <= 0:
            logger.debug("no time left to enrich %d templates", len(results))
            return results

        head = results[:self._enrich_limit]
        try:
            pages = await asyncio.wait_for(
                asyncio.gather(*(self._fetcher.fetch(r.url) for r in head)),
                timeout=deadline,
            )
        except asyncio.TimeoutError:
            logger.debug("template enrichment timed out after %.2fs", deadline)
            return results

        enriched = [
            r.model_copy(update={"summary": parse_summary(p)}) if p else r
            for r, p in zip(head, pages)
        ]
        return enriched + results[self._enrich_limit:]

    async def close(self) -> None:
        await self._fetcher.close()
