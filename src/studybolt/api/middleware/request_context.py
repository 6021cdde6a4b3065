"""Per-request context: request id binding and body size guard."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, Response

from studybolt.shared.exceptions import PayloadTooLargeError

REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI, max_body_bytes: int) -> None:
    """Bind a request id into log context and reject oversized bodies."""

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_body_bytes:
            exc = PayloadTooLargeError(max_body_bytes)
            return JSONResponse(
                status_code=413,
                content={"error": exc.message},
                headers={REQUEST_ID_HEADER: request_id},
            )

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
