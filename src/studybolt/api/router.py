"""Main API router aggregating all routes."""

from fastapi import APIRouter

from studybolt.api.routes import chat, health, root, search

# Routes under /api
api_router = APIRouter()
api_router.include_router(chat.router)
api_router.include_router(search.router)

# Top-level routes
meta_router = APIRouter()
meta_router.include_router(root.router)
meta_router.include_router(health.router)
