"""Streaming chat endpoint.

Replies are streamed as Server-Sent Events::

    data: {"content": "..."}
    data: {"content": "..."}
    data: [DONE]

A failure after the stream has opened is reported as a single
``data: {"error": "..."}`` event before the connection closes.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from studybolt.api.deps import get_chat_pipeline
from studybolt.api.schemas import ChatRequest, ErrorResponse
from studybolt.api.sse import SSE_HEADERS, encode_events
from studybolt.domain.chat.pipeline import ChatPipeline
from studybolt.shared.cancellation import CancellationToken

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/event-stream": {}}},
        400: {"model": ErrorResponse},
    },
)
async def chat(
    request: Request,
    chat_request: ChatRequest,
    pipeline: ChatPipeline = Depends(get_chat_pipeline),
) -> StreamingResponse:
    """Stream a reply from the StudyBolt agent.

    Set ``enableSearch: true`` to ground the reply in a web search on the
    latest user message.
    """
    # Raises ValidationError (-> 400) before any stream bytes are written
    messages = pipeline.validate(chat_request.messages)

    cancel_token = CancellationToken(probe=request.is_disconnected)
    events = pipeline.stream_chat(
        messages,
        enable_search=chat_request.enable_search,
        cancel_token=cancel_token,
    )
    return StreamingResponse(
        encode_events(events),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
