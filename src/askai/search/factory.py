from typing import Any

from ..config import SEARCH_TIMEOUT_SECONDS
from .aggregator import RetrievalAggregator
from .base import SearchProvider
from .providers import DocsSearchProvider, ForumSearchProvider, HtmlFetcher, TemplateSearchProvider


def create_search_provider(source: str, **config: Any) -> SearchProvider:
    """Create a search provider instance.

    This factory function hides the instantiation logic for the sources.

    Args:
        source: Source type ('docs', 'forum', 'templates')
        **config: Provider-specific configuration
            All sources:
                - timeout: float (default: 5.0), used when no fetcher is given
                - fetcher: HtmlFetcher | None
                - limit: int
            For templates:
                - import_base_url: str
                - enrich_limit: int (default: 3)
                - enrich_timeout: float (default: 1.5)
                - budget: float | None, the caller's timeout for a whole search

    Returns:
        Initialized search provider instance

    Raises:
        ValueError: If source type is not supported
    """
    source_lower = source.lower()
    timeout = config.pop("timeout", None)
    fetcher = config.pop("fetcher", None)
    if fetcher is None:
        fetcher = HtmlFetcher(timeout=timeout) if timeout else HtmlFetcher()

    if source_lower == "docs":
        return DocsSearchProvider(fetcher, **config)

    if source_lower == "forum":
        return ForumSearchProvider(fetcher, **config)

    if source_lower == "templates":
        return TemplateSearchProvider(fetcher, **config)

    raise ValueError(
        f"Unsupported search source: {source}. "
        f"Supported sources: 'docs', 'forum', 'templates'"
    )


def create_retrieval_aggregator(
    timeout: float | None = None,
    import_base_url: str | None = None
) -> RetrievalAggregator:
    """Create an aggregator over the three scraping providers.

    Args:
        timeout: Per-source timeout in seconds (default: 5.0)
        import_base_url: Base URL for template import links
    """
    fetch_config: dict[str, Any] = {"timeout": timeout} if timeout else {}
    template_config: dict[str, Any] = {**fetch_config, "budget": timeout or SEARCH_TIMEOUT_SECONDS}
    if import_base_url:
        template_config["import_base_url"] = import_base_url

    aggregator_config = {"timeout": timeout} if timeout else {}
    return RetrievalAggregator(
        docs=create_search_provider("docs", **fetch_config),
        forum=create_search_provider("forum", **fetch_config),
        templates=create_search_provider("templates", **template_config),
        **aggregator_config,
    )
