"""SerpAPI client for Google web search.

SerpAPI (https://serpapi.com) wraps Google search results as JSON. Only
``organic_results`` are used; ads, knowledge graph and related questions
are ignored.
"""

from typing import Any

import httpx

from studybolt import __version__
from studybolt.config import DEFAULT_SERPAPI_BASE_URL
from studybolt.infrastructure.search.base import (
    DEFAULT_RESULT_COUNT,
    SearchProvider,
    SearchResult,
)
from studybolt.shared.exceptions import NetworkError, UpstreamError
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)


class SerpAPISearchProvider(SearchProvider):
    """Web search provider using SerpAPI's Google engine."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_SERPAPI_BASE_URL,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the SerpAPI client.

        Args:
            api_key: SerpAPI key
            base_url: Search endpoint
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests inject a MockTransport here)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    @property
    def provider_name(self) -> str:
        return "serpapi"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"StudyBolt/{__version__}",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, query: str, limit: int = DEFAULT_RESULT_COUNT) -> list[SearchResult]:
        """Query SerpAPI and normalize its organic results."""
        client = await self._get_client()
        params: dict[str, Any] = {
            "q": query,
            "num": limit,
            "engine": "google",
            "api_key": self.api_key,
        }

        try:
            response = await client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            raise NetworkError(f"SerpAPI request failed: {e}", service=self.provider_name) from e

        if not response.is_success:
            raise UpstreamError(
                f"SERP request failed: {response.status_code}",
                service=self.provider_name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                "SerpAPI returned a non-JSON body",
                service=self.provider_name,
                status_code=response.status_code,
            ) from e

        results = self._parse_results(data, limit)
        logger.debug("serpapi_search_success", query=query, results=len(results))
        return results

    @staticmethod
    def _parse_results(data: Any, limit: int) -> list[SearchResult]:
        """Map SerpAPI ``organic_results`` to SearchResult records."""
        organic = data.get("organic_results") if isinstance(data, dict) else None
        if not isinstance(organic, list):
            return []

        results: list[SearchResult] = []
        for item in organic[:limit]:
            if not isinstance(item, dict):
                item = {}
            results.append(
                SearchResult(
                    id=f"search-result-{len(results) + 1}",
                    title=str(item.get("title") or ""),
                    snippet=str(item.get("snippet") or ""),
                    link=str(item.get("link") or ""),
                )
            )
        return results
