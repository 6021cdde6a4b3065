"""Search-with-summary service.

Flow per request:
1. Hash ``(query, limit)`` into a cache key
2. Cache hit: return the stored summary tagged ``cache``
3. Cache miss: search, summarize with the agent, store with TTL, return
   tagged ``fresh``

The cache only ever improves latency: a failed read counts as a miss and a
failed write is logged and otherwise ignored.
"""

import hashlib
from datetime import UTC, datetime

from studybolt.domain.chat.ports import CompletionClientPort, SearchProviderPort
from studybolt.domain.chat.types import ChatMessage
from studybolt.domain.search.types import SearchSummary, SummarySource
from studybolt.infrastructure.ai.prompts.search_summary_v1 import SearchSummaryPromptV1
from studybolt.infrastructure.cache.base import CacheStore
from studybolt.infrastructure.search.base import DEFAULT_RESULT_COUNT, validate_search_input
from studybolt.observability.metrics import CACHE_LOOKUPS
from studybolt.shared.exceptions import CacheUnavailable
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 3600


def cache_key(query: str, limit: int) -> str:
    """Deterministic cache key for a (query, limit) pair."""
    return hashlib.sha256(f"search:{query.strip()}:{limit}".encode()).hexdigest()


class SearchSummaryService:
    """Answers dedicated search requests with an AI summary of the results."""

    def __init__(
        self,
        search_provider: SearchProviderPort,
        completion_client: CompletionClientPort,
        cache: CacheStore,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        self.search_provider = search_provider
        self.completion_client = completion_client
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.prompt = SearchSummaryPromptV1()

    async def search_with_summary(
        self,
        query: str,
        limit: int = DEFAULT_RESULT_COUNT,
    ) -> tuple[SearchSummary, SummarySource]:
        """Return a summary for ``query`` and whether it came from the cache.

        Raises:
            ValidationError: If query is empty or limit < 1
            UpstreamError: Search provider or agent returned an error status
            NetworkError: Search provider or agent could not be reached
        """
        validate_search_input(query, limit)
        key = cache_key(query, limit)

        cached = await self._read_cache(key)
        if cached is not None:
            CACHE_LOOKUPS.labels(result="hit").inc()
            logger.info("search_cache_hit", query=query, limit=limit)
            return cached, "cache"

        CACHE_LOOKUPS.labels(result="miss").inc()
        summary = await self._summarize(query, limit)
        await self._write_cache(key, summary)
        return summary, "fresh"

    async def _summarize(self, query: str, limit: int) -> SearchSummary:
        results = await self.search_provider.fetch(query, limit)
        results = results[:limit]

        messages = [
            ChatMessage(role="system", content=self.prompt.render_system()),
            ChatMessage(
                role="user",
                content=self.prompt.render_user(query, [r.rendered_text for r in results]),
            ),
        ]
        summary_text = await self.completion_client.complete_once(messages)

        logger.info(
            "search_summarized",
            query=query,
            limit=limit,
            results=len(results),
            prompt_version=self.prompt.version.version,
        )
        return SearchSummary(
            query=query,
            summary=summary_text,
            sources=[r.to_source() for r in results],
            timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        )

    async def _read_cache(self, key: str) -> SearchSummary | None:
        try:
            raw = await self.cache.get(key)
        except CacheUnavailable as e:
            CACHE_LOOKUPS.labels(result="error").inc()
            logger.warning("search_cache_read_failed", error=e.message)
            return None
        if raw is None:
            return None
        try:
            return SearchSummary.from_json(raw)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("search_cache_entry_corrupt", key=key, error=str(e))
            return None

    async def _write_cache(self, key: str, summary: SearchSummary) -> None:
        try:
            await self.cache.set(key, summary.to_json(), self.ttl_seconds)
        except CacheUnavailable as e:
            logger.warning("search_cache_write_failed", error=e.message)


__all__ = ["SearchSummaryService", "cache_key"]
