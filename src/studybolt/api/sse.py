"""Server-Sent Events framing for chat streams."""

import json
from collections.abc import AsyncIterator
from contextlib import aclosing

from studybolt.domain.chat.types import StreamEvent

DONE_SENTINEL = "[DONE]"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_event(event: StreamEvent) -> str:
    """Frame one stream event as an SSE ``data:`` line."""
    if event.done:
        payload = DONE_SENTINEL
    elif event.error is not None:
        payload = json.dumps({"error": event.error}, ensure_ascii=False)
    else:
        payload = json.dumps({"content": event.content}, ensure_ascii=False)
    return f"data: {payload}\n\n"


async def encode_events(events: AsyncIterator[StreamEvent]) -> AsyncIterator[str]:
    """Frame events in order; closing this iterator closes ``events``."""
    async with aclosing(events) as stream:
        async for event in stream:
            yield format_event(event)
