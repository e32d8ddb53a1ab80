from .docs import DocsSearchProvider
from .forum import ForumSearchProvider
from .http import HtmlFetcher
from .templates import TemplateSearchProvider

__all__ = ["DocsSearchProvider", "ForumSearchProvider", "HtmlFetcher", "TemplateSearchProvider"]
