"""Shared HTML fetching for scraping providers."""

import logging

import httpx

from ...config import SEARCH_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "Mozilla/5.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9",
}


class HtmlFetcher:
    """Fetches pages with a fixed timeout, yielding '' on any failure.

    Hidden design decisions:
    - HTTP client lifecycle
    - Request headers
    - Timeout enforcement
    """

    def __init__(
        self,
        timeout: float = SEARCH_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None
    ):
        """Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds
            client: Optional pre-built client (tests inject a MockTransport)
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers=_HEADERS,
            follow_redirects=True,
        )

    async def fetch(self, url: str, params: dict[str, str] | None = None) -> str:
        """GET a page and return its body, or '' on failure."""
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.debug("fetch %s failed: %s", url, e)
            return ""

        if response.status_code >= 400:
            logger.debug("fetch %s returned %s", url, response.status_code)
            return ""
        return response.text

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
