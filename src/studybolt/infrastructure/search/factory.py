"""Factory for the configured search provider."""

from studybolt.config import Settings
from studybolt.infrastructure.search.base import SearchProvider
from studybolt.infrastructure.search.mock_provider import MockSearchProvider
from studybolt.infrastructure.search.serpapi import SerpAPISearchProvider
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)


def build_search_provider(settings: Settings) -> SearchProvider:
    """Build SerpAPI when a key is configured, the mock provider otherwise."""
    if settings.serpapi_api_key:
        logger.info("using_search_provider", provider="serpapi")
        return SerpAPISearchProvider(
            api_key=settings.serpapi_api_key,
            base_url=settings.serpapi_base_url,
            timeout=settings.search_timeout_seconds,
        )

    if settings.is_production:
        raise ValueError("SERPAPI_API_KEY is not configured")
    logger.warning("using_search_provider", provider="mock", reason="missing_serpapi_key")
    return MockSearchProvider()
