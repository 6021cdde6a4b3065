"""Base classes for web search providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from studybolt.observability.metrics import UPSTREAM_ERRORS
from studybolt.shared.exceptions import ExternalServiceError, ValidationError
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RESULT_COUNT = 5


@dataclass(frozen=True)
class SearchResult:
    """A single normalized web search hit."""

    id: str  # "search-result-{rank}", 1-indexed
    title: str
    snippet: str
    link: str

    @property
    def rendered_text(self) -> str:
        """Plain-text rendering used when feeding results to the agent."""
        return f"{self.title}\n{self.snippet}\nSource: {self.link}"

    def to_source(self) -> dict[str, str]:
        """Source record as stored in a search summary."""
        return {
            "title": self.title,
            "snippet": self.snippet,
            "link": self.link,
            "id": self.id,
        }


def validate_search_input(query: str, limit: int) -> None:
    """Reject empty queries and non-positive limits."""
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Query is required")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("Result limit must be a positive integer", {"limit": limit})


class SearchProvider(ABC):
    """Base class for web search providers (e.g., SerpAPI)."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name for logging/reference."""
        pass

    @abstractmethod
    async def fetch(self, query: str, limit: int = DEFAULT_RESULT_COUNT) -> list[SearchResult]:
        """Run a search and return at most ``limit`` results.

        Raises:
            UpstreamError: Provider answered with a non-success status
            NetworkError: Provider could not be reached
        """
        pass

    async def search(self, query: str, limit: int = DEFAULT_RESULT_COUNT) -> list[SearchResult]:
        """Search, degrading to an empty list on provider failure.

        Raises:
            ValidationError: If query is empty or limit < 1
        """
        validate_search_input(query, limit)
        try:
            return await self.fetch(query, limit)
        except ExternalServiceError as e:
            UPSTREAM_ERRORS.labels(service=e.service).inc()
            logger.warning(
                "search_failed",
                provider=self.provider_name,
                error=e.message,
                details=e.details,
            )
            return []

    async def close(self) -> None:
        """Release network resources held by the provider."""
        return None
