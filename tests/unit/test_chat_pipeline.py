"""Unit tests for the chat pipeline."""

from unittest.mock import AsyncMock

import pytest

from studybolt.domain.chat.pipeline import STREAM_ERROR_MESSAGE, ChatPipeline
from studybolt.domain.chat.types import ChatMessage, StreamEvent
from studybolt.infrastructure.search.mock_provider import MockSearchProvider
from studybolt.shared.cancellation import CancellationToken
from studybolt.shared.exceptions import ValidationError
from tests.fakes import FailingSearchProvider, FakeAgentClient


async def _events(pipeline, messages, **kwargs):
    return [event async for event in pipeline.stream_chat(messages, **kwargs)]


class TestValidate:
    """Test request message validation."""

    @pytest.mark.parametrize("raw", [None, [], "hello", {"role": "user"}])
    def test_missing_messages(self, raw):
        with pytest.raises(ValidationError, match="Messages array is required"):
            ChatPipeline.validate(raw)

    def test_invalid_role(self):
        with pytest.raises(ValidationError):
            ChatPipeline.validate([{"role": "tool", "content": "x"}])

    def test_non_string_content(self):
        with pytest.raises(ValidationError):
            ChatPipeline.validate([{"role": "user", "content": 42}])

    def test_non_object_entry(self):
        with pytest.raises(ValidationError):
            ChatPipeline.validate(["hello"])

    def test_multiple_leading_system_messages(self):
        with pytest.raises(ValidationError):
            ChatPipeline.validate(
                [
                    {"role": "system", "content": "Answer in German."},
                    {"role": "system", "content": "Keep it short."},
                    {"role": "user", "content": "Was ist Mitose?"},
                ]
            )

    def test_single_leading_system_message_allowed(self):
        messages = ChatPipeline.validate(
            [
                {"role": "system", "content": "Answer in German."},
                {"role": "user", "content": "Was ist Mitose?"},
            ]
        )

        assert [m.role for m in messages] == ["system", "user"]

    def test_valid_messages(self):
        messages = ChatPipeline.validate(
            [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello!"},
            ]
        )

        assert messages == [
            ChatMessage(role="user", content="Hi"),
            ChatMessage(role="assistant", content="Hello!"),
        ]


class TestStreamChat:
    """Test event sequences produced by stream_chat."""

    @pytest.mark.asyncio
    async def test_without_search(self):
        agent = FakeAgentClient()
        search = MockSearchProvider()
        pipeline = ChatPipeline(agent, search)
        messages = [ChatMessage(role="user", content="What is mitosis?")]

        events = await _events(pipeline, messages, enable_search=False)

        assert events == [
            StreamEvent.delta("Mitosis "),
            StreamEvent.delta("is cell "),
            StreamEvent.delta("division."),
            StreamEvent.completed(),
        ]
        assert search.queries == []
        assert agent.stream_calls == [messages]
        assert agent.stream_closed is True

    @pytest.mark.asyncio
    async def test_with_search_prepends_context(self):
        agent = FakeAgentClient()
        search = MockSearchProvider()
        pipeline = ChatPipeline(agent, search, search_results=4)
        messages = [ChatMessage(role="user", content="What is mitosis?")]

        events = await _events(pipeline, messages, enable_search=True)

        assert events[-1] == StreamEvent.completed()
        assert search.queries == [("What is mitosis?", 4)]
        sent = agent.stream_calls[0]
        assert len(sent) == 2
        assert sent[0].role == "system"
        assert "[What is mitosis? - study notes part 1]" in sent[0].content
        assert sent[1] == messages[0]

    @pytest.mark.asyncio
    async def test_search_skipped_when_last_message_not_user(self):
        agent = FakeAgentClient()
        search = MockSearchProvider()
        pipeline = ChatPipeline(agent, search)
        messages = [
            ChatMessage(role="user", content="Hi"),
            ChatMessage(role="assistant", content="Hello!"),
        ]

        await _events(pipeline, messages, enable_search=True)

        assert search.queries == []
        assert agent.stream_calls == [messages]

    @pytest.mark.asyncio
    async def test_search_skipped_for_blank_user_message(self):
        agent = FakeAgentClient()
        search = MockSearchProvider()
        pipeline = ChatPipeline(agent, search)

        await _events(pipeline, [ChatMessage(role="user", content="   ")], enable_search=True)

        assert search.queries == []

    @pytest.mark.asyncio
    async def test_search_failure_falls_back_to_empty_context(self):
        agent = FakeAgentClient()
        search = FailingSearchProvider()
        pipeline = ChatPipeline(agent, search)
        messages = [ChatMessage(role="user", content="What is mitosis?")]

        events = await _events(pipeline, messages, enable_search=True)

        assert events[-1] == StreamEvent.completed()
        assert search.calls == 1
        system = agent.stream_calls[0][0]
        assert system.role == "system"
        assert system.content.endswith("Current search results:\n")

    @pytest.mark.asyncio
    async def test_unexpected_search_exception_is_contained(self):
        agent = FakeAgentClient()
        search = MockSearchProvider()
        search.search = AsyncMock(side_effect=RuntimeError("boom"))
        pipeline = ChatPipeline(agent, search)

        events = await _events(
            pipeline, [ChatMessage(role="user", content="q")], enable_search=True
        )

        assert events[-1] == StreamEvent.completed()

    @pytest.mark.asyncio
    async def test_mid_stream_failure_emits_single_error(self):
        agent = FakeAgentClient(fail_after=2)
        pipeline = ChatPipeline(agent, MockSearchProvider())

        events = await _events(pipeline, [ChatMessage(role="user", content="q")])

        assert events == [
            StreamEvent.delta("Mitosis "),
            StreamEvent.delta("is cell "),
            StreamEvent.failure(STREAM_ERROR_MESSAGE),
        ]
        assert agent.stream_closed is True

    @pytest.mark.asyncio
    async def test_failure_after_last_fragment_has_no_done(self):
        agent = FakeAgentClient(fail_after=3)
        pipeline = ChatPipeline(agent, MockSearchProvider())

        events = await _events(pipeline, [ChatMessage(role="user", content="q")])

        assert events[-1] == StreamEvent.failure(STREAM_ERROR_MESSAGE)
        assert StreamEvent.completed() not in events

    @pytest.mark.asyncio
    async def test_failure_before_first_fragment(self):
        agent = FakeAgentClient(fail_after=0)
        pipeline = ChatPipeline(agent, MockSearchProvider())

        events = await _events(pipeline, [ChatMessage(role="user", content="q")])

        assert events == [StreamEvent.failure(STREAM_ERROR_MESSAGE)]

    @pytest.mark.asyncio
    async def test_cancellation_ends_without_terminal_event(self):
        agent = FakeAgentClient()
        pipeline = ChatPipeline(agent, MockSearchProvider())
        token = CancellationToken()
        received = []

        async for event in pipeline.stream_chat(
            [ChatMessage(role="user", content="q")], cancel_token=token
        ):
            received.append(event)
            token.cancel()

        assert received == [StreamEvent.delta("Mitosis ")]
        assert agent.stream_closed is True

    @pytest.mark.asyncio
    async def test_consumer_close_releases_upstream(self):
        agent = FakeAgentClient()
        pipeline = ChatPipeline(agent, MockSearchProvider())

        stream = pipeline.stream_chat([ChatMessage(role="user", content="q")])
        assert await anext(stream) == StreamEvent.delta("Mitosis ")
        await stream.aclose()

        assert agent.stream_closed is True
