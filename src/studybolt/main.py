"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studybolt import __version__
from studybolt.api.middleware.request_context import REQUEST_ID_HEADER, setup_request_context
from studybolt.api.router import api_router, meta_router
from studybolt.config import get_settings
from studybolt.infrastructure.ai.factory import build_agent_client
from studybolt.infrastructure.cache.factory import build_cache_store
from studybolt.infrastructure.search.factory import build_search_provider
from studybolt.observability.metrics import setup_metrics
from studybolt.shared.exceptions import (
    PayloadTooLargeError,
    StudyBoltError,
    ValidationError,
)
from studybolt.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown events."""
    # Startup
    setup_logging()
    logger.info("studybolt_starting", version=__version__)

    # Shared clients, built once; tests may pre-populate app.state
    settings = get_settings()
    app.state.cache_store = getattr(app.state, "cache_store", None) or build_cache_store(settings)
    app.state.search_provider = getattr(
        app.state, "search_provider", None
    ) or build_search_provider(settings)
    app.state.agent_client = getattr(app.state, "agent_client", None) or build_agent_client(
        settings
    )

    yield

    # Shutdown
    logger.info("studybolt_stopping")
    for name in ("search_provider", "agent_client", "cache_store"):
        resource = getattr(app.state, name, None)
        close = getattr(resource, "close", None)
        if close is None:
            continue
        try:
            await close()
        except Exception as e:
            logger.warning("resource_close_failed", resource=name, error=str(e))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="StudyBolt API",
        description="AI study assistant: streamed chat and summarized web search",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    setup_request_context(app, max_body_bytes=settings.max_request_body_bytes)

    # Exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(meta_router)
    app.include_router(api_router, prefix="/api")

    # Observability
    setup_metrics(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(PayloadTooLargeError)
    async def payload_too_large_handler(
        request: Request, exc: PayloadTooLargeError
    ) -> JSONResponse:
        _ = request
        return JSONResponse(status_code=413, content={"error": exc.message})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("request_rejected", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("request_body_invalid", path=request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body",
                "details": {"errors": jsonable_encoder(exc.errors())},
            },
        )

    @app.exception_handler(StudyBoltError)
    async def studybolt_error_handler(request: Request, exc: StudyBoltError) -> JSONResponse:
        _ = request
        logger.error("unhandled_error", error=exc.message, details=exc.details)
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error", "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        _ = request
        logger.exception("unexpected_error", error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error", "message": "An unexpected error occurred"},
        )


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    base = f"http://localhost:{settings.port}"
    logger.info(
        "studybolt_listening",
        port=settings.port,
        chat_endpoint=f"{base}/api/chat",
        search_endpoint=f"{base}/api/search",
        health_endpoint=f"{base}/health",
    )
    uvicorn.run("studybolt.main:app", host="0.0.0.0", port=settings.port)


# Create app instance
app = create_app()
