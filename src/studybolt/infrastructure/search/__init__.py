"""Web search providers."""

from studybolt.infrastructure.search.base import SearchProvider, SearchResult
from studybolt.infrastructure.search.factory import build_search_provider
from studybolt.infrastructure.search.mock_provider import MockSearchProvider
from studybolt.infrastructure.search.serpapi import SerpAPISearchProvider

__all__ = [
    "SearchProvider",
    "SearchResult",
    "MockSearchProvider",
    "SerpAPISearchProvider",
    "build_search_provider",
]
