from .aggregator import RetrievalAggregator
from .base import SearchProvider
from .factory import create_retrieval_aggregator, create_search_provider
from .models import RetrievalResults, SearchResult, TemplateResult

__all__ = [
    "RetrievalAggregator",
    "SearchProvider",
    "create_retrieval_aggregator",
    "create_search_provider",
    "RetrievalResults",
    "SearchResult",
    "TemplateResult",
]
