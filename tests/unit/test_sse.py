"""Unit tests for SSE framing."""

import pytest

from studybolt.api.sse import DONE_SENTINEL, encode_events, format_event
from studybolt.domain.chat.types import StreamEvent


class TestFormatEvent:

    def test_content_event(self):
        assert format_event(StreamEvent.delta("Hello")) == 'data: {"content": "Hello"}\n\n'

    def test_non_ascii_content_kept(self):
        assert format_event(StreamEvent.delta("Zellteilung ü")) == (
            'data: {"content": "Zellteilung ü"}\n\n'
        )

    def test_newlines_are_escaped(self):
        frame = format_event(StreamEvent.delta("line one\nline two"))

        assert frame == 'data: {"content": "line one\\nline two"}\n\n'

    def test_error_event(self):
        assert format_event(StreamEvent.failure("Failed to generate response")) == (
            'data: {"error": "Failed to generate response"}\n\n'
        )

    def test_done_event(self):
        assert format_event(StreamEvent.completed()) == f"data: {DONE_SENTINEL}\n\n"


class TestEncodeEvents:

    @pytest.mark.asyncio
    async def test_frames_in_order(self):
        async def events():
            yield StreamEvent.delta("a")
            yield StreamEvent.delta("b")
            yield StreamEvent.completed()

        frames = [frame async for frame in encode_events(events())]

        assert frames == [
            'data: {"content": "a"}\n\n',
            'data: {"content": "b"}\n\n',
            "data: [DONE]\n\n",
        ]

    @pytest.mark.asyncio
    async def test_closing_encoder_closes_source(self):
        closed = []

        async def events():
            try:
                yield StreamEvent.delta("a")
                yield StreamEvent.delta("b")
            finally:
                closed.append(True)

        encoder = encode_events(events())
        await anext(encoder)
        await encoder.aclose()

        assert closed == [True]
