"""Search-with-summary domain module."""

from studybolt.domain.search.service import SearchSummaryService, cache_key
from studybolt.domain.search.types import SearchSummary

__all__ = ["SearchSummary", "SearchSummaryService", "cache_key"]
