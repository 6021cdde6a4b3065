"""Mock search provider for development and testing."""

from studybolt.infrastructure.search.base import (
    DEFAULT_RESULT_COUNT,
    SearchProvider,
    SearchResult,
)


class MockSearchProvider(SearchProvider):
    """Deterministic search provider used when no SerpAPI key is configured."""

    def __init__(self) -> None:
        self.queries: list[tuple[str, int]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    async def fetch(self, query: str, limit: int = DEFAULT_RESULT_COUNT) -> list[SearchResult]:
        """Return mock search results."""
        self.queries.append((query, limit))
        slug = query.strip().lower().replace(" ", "-")
        return [
            SearchResult(
                id=f"search-result-{rank}",
                title=f"{query.strip()} - study notes part {rank}",
                snippet=f"Overview {rank} of {query.strip()} for revision.",
                link=f"https://example.org/{slug}/{rank}",
            )
            for rank in range(1, min(limit, 3) + 1)
        ]
