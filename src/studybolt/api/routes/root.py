"""Capability listing at the API root."""

from fastapi import APIRouter

router = APIRouter(tags=["meta"])

ENDPOINTS = {
    "POST /api/chat": "Main chat endpoint (set enableSearch: true for web search)",
    "POST /api/search": "Dedicated search endpoint",
    "GET /health": "Health check",
    "GET /metrics": "Prometheus metrics",
}


@router.get("/")
async def root() -> dict[str, object]:
    from studybolt import __version__

    return {
        "name": "StudyBolt API",
        "version": __version__,
        "endpoints": ENDPOINTS,
    }
