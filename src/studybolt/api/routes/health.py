"""Health check endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from studybolt.api.deps import get_cache_store
from studybolt.api.schemas import HealthErrorResponse, HealthResponse
from studybolt.config import Settings, get_settings
from studybolt.infrastructure.cache.base import CacheStore
from studybolt.shared.exceptions import CacheUnavailable
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": HealthErrorResponse}},
)
async def health_check(
    cache: CacheStore = Depends(get_cache_store),
    settings: Settings = Depends(get_settings),
) -> HealthResponse | JSONResponse:
    """Report service status; fails when the cache store is unreachable."""
    try:
        await cache.ping()
    except CacheUnavailable as e:
        logger.warning("health_check_failed", backend=cache.backend_name, error=e.message)
        return JSONResponse(
            status_code=500,
            content=HealthErrorResponse(
                status="error",
                redis="disconnected",
                error=e.message,
            ).model_dump(),
        )

    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        agent_id=settings.mistral_agent_id,
        redis="connected",
    )
