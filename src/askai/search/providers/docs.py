"""Documentation search through DuckDuckGo's HTML endpoint."""

import html
import re
from urllib.parse import unquote

from ...config import DOCS_RESULT_LIMIT
from ..base import SearchProvider
from ..models import SearchResult
from .http import HtmlFetcher

_SEARCH_URL = "https://duckduckgo.com/html/"
_RESULT_LINK = re.compile(
    r'<a[^>]*class="result__a"[^>]*href="([^"]+)"[^>]*>(.*?)</a>',
    re.IGNORECASE | re.DOTALL,
)
_REDIRECT_TARGET = re.compile(r"uddg=([^&]+)")
_TAG = re.compile(r"<[^>]+>")


def parse_docs_results(page: str, limit: int = DOCS_RESULT_LIMIT) -> list[SearchResult]:
    """Extract result links from a DuckDuckGo HTML results page."""
    results: list[SearchResult] = []
    for match in _RESULT_LINK.finditer(page):
        if len(results) >= limit:
            break
        href = html.unescape(match.group(1))
        redirect = _REDIRECT_TARGET.search(href)
        if redirect:
            href = unquote(redirect.group(1))
        title = html.unescape(_TAG.sub("", match.group(2))).strip()
        results.append(SearchResult(title=title, url=href))
    return results


class DocsSearchProvider(SearchProvider):
    """Searches the product documentation site."""

    def __init__(
        self,
        fetcher: HtmlFetcher,
        site: str = "docs.n8n.io",
        limit: int = DOCS_RESULT_LIMIT
    ):
        self._fetcher = fetcher
        self._site = site
        self.limit = limit

    @property
    def name(self) -> str:
        return "docs"

    async def search(self, query: str) -> list[SearchResult]:
        page = await self._fetcher.fetch(_SEARCH_URL, params={"q": f"site:{self._site} {query}"})
        return parse_docs_results(page, self.limit)

    async def close(self) -> None:
        await self._fetcher.close()
