"""Dedicated search endpoint: web results plus an AI summary, cached."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from studybolt.api.deps import get_search_service
from studybolt.api.schemas import ErrorResponse, SearchRequest, SearchResponse, SourceItem
from studybolt.config import Settings, get_settings
from studybolt.domain.search.service import SearchSummaryService
from studybolt.shared.exceptions import ExternalServiceError, ValidationError
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["search"])


def resolve_result_count(raw: Any, settings: Settings) -> int:
    """Apply the default and clamp ``numResults`` to the configured maximum."""
    if raw is None:
        return settings.search_default_results
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValidationError("numResults must be an integer", {"numResults": raw})
    if raw < 1:
        raise ValidationError("numResults must be at least 1", {"numResults": raw})
    return min(raw, settings.search_max_results)


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    search_request: SearchRequest,
    service: SearchSummaryService = Depends(get_search_service),
    settings: Settings = Depends(get_settings),
) -> SearchResponse | JSONResponse:
    """Search the web and summarize the results.

    Identical ``(query, numResults)`` pairs are served from the cache for
    the configured TTL (``source: "cache"``).
    """
    query = search_request.query
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("Query is required")
    limit = resolve_result_count(search_request.num_results, settings)

    try:
        summary, source = await service.search_with_summary(query, limit)
    except ExternalServiceError as e:
        logger.error("search_request_failed", query=query, error=e.message, details=e.details)
        return JSONResponse(
            status_code=500,
            content={"error": "Search failed", "message": e.message},
        )

    return SearchResponse(
        source=source,
        query=summary.query,
        summary=summary.summary,
        sources=[SourceItem(**item) for item in summary.sources],
        timestamp=summary.timestamp,
    )
