"""FastAPI dependencies wiring app-scoped clients into request handlers.

Clients are built once in the application lifespan and stored on
``app.state``; tests replace them with fakes before issuing requests.
"""

from typing import Any

from fastapi import Depends, Request

from studybolt.config import Settings, get_settings
from studybolt.domain.chat.pipeline import ChatPipeline
from studybolt.domain.search.service import SearchSummaryService
from studybolt.infrastructure.cache.base import CacheStore


def _state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"Application dependency '{name}' is not initialized")
    return value


def get_cache_store(request: Request) -> CacheStore:
    return _state(request, "cache_store")


def get_chat_pipeline(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> ChatPipeline:
    return ChatPipeline(
        completion_client=_state(request, "agent_client"),
        search_provider=_state(request, "search_provider"),
        search_results=settings.search_default_results,
    )


def get_search_service(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SearchSummaryService:
    return SearchSummaryService(
        search_provider=_state(request, "search_provider"),
        completion_client=_state(request, "agent_client"),
        cache=_state(request, "cache_store"),
        ttl_seconds=settings.cache_ttl_seconds,
    )


__all__ = [
    "get_cache_store",
    "get_chat_pipeline",
    "get_search_service",
    "get_settings",
]
