"""Community forum search (Discourse topic links)."""

import html
import re

from ...config import FORUM_RESULT_LIMIT
from ..base import SearchProvider
from ..models import SearchResult
from .http import HtmlFetcher

_TOPIC_LINK = re.compile(r'<a[^>]+href="(/t/[^"]+)"[^>]*>([^<]+)</a>', re.IGNORECASE)


def parse_forum_results(
    page: str,
    base_url: str,
    limit: int = FORUM_RESULT_LIMIT
) -> list[SearchResult]:
    """Extract unique topic links from a forum search page."""
    results: list[SearchResult] = []
    seen: set[str] = set()
    for match in _TOPIC_LINK.finditer(page):
        if len(results) >= limit:
            break
        url = base_url + match.group(1)
        if url in seen:
            continue
        seen.add(url)
        results.append(SearchResult(title=html.unescape(match.group(2)).strip(), url=url))
    return results


class ForumSearchProvider(SearchProvider):
    """Searches the community forum."""

    def __init__(
        self,
        fetcher: HtmlFetcher,
        base_url: str = "https://community.n8n.io",
        limit: int = FORUM_RESULT_LIMIT
    ):
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self.limit = limit

    @property
    def name(self) -> str:
        return "forum"

    async def search(self, query: str) -> list[SearchResult]:
        page = await self._fetcher.fetch(f"{self._base_url}/search", params={"q": query})
        return parse_forum_results(page, self._base_url, self.limit)

    async def close(self) -> None:
        await self._fetcher.close()
