"""Chat pipeline: optional search augmentation followed by a streamed reply.

States per request::

    Validating -> (SearchPending) -> Streaming -> Completed
                                         \\-> Failed

Validation runs before the HTTP stream is opened so a malformed request
gets a plain 400. Once streaming has started every outcome is reported
in-band: content events, then either a done event or a single error event.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Any

from studybolt.domain.chat.augmentation import augment
from studybolt.domain.chat.ports import CompletionClientPort, SearchProviderPort
from studybolt.domain.chat.types import ChatMessage, StreamEvent, ensure_single_leading_system
from studybolt.infrastructure.search.base import DEFAULT_RESULT_COUNT, SearchResult
from studybolt.observability.metrics import CHAT_STREAMS
from studybolt.shared.cancellation import CancellationToken
from studybolt.shared.exceptions import StreamCancelled, ValidationError
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

STREAM_ERROR_MESSAGE = "Failed to generate response"
MISSING_MESSAGES_ERROR = "Messages array is required"


class ChatPipeline:
    """Turns a conversation into a stream of reply events.

    Issues exactly one streaming completion call per request; the search
    provider is consulted first only when augmentation was requested and
    the conversation ends with a user message.
    """

    def __init__(
        self,
        completion_client: CompletionClientPort,
        search_provider: SearchProviderPort,
        search_results: int = DEFAULT_RESULT_COUNT,
    ) -> None:
        self.completion_client = completion_client
        self.search_provider = search_provider
        self.search_results = search_results

    @staticmethod
    def validate(raw_messages: Any) -> list[ChatMessage]:
        """Validate raw request messages.

        Raises:
            ValidationError: If messages are missing, not a list, empty, malformed
                or start with more than one system message
        """
        if not raw_messages or not isinstance(raw_messages, list):
            raise ValidationError(MISSING_MESSAGES_ERROR)
        messages: list[ChatMessage] = []
        for raw in raw_messages:
            if isinstance(raw, ChatMessage):
                messages.append(raw)
            elif isinstance(raw, dict):
                messages.append(ChatMessage.from_dict(raw))
            else:
                raise ValidationError("Each message must be an object with role and content")
        ensure_single_leading_system(messages)
        return messages

    async def prepare_messages(
        self,
        messages: Sequence[ChatMessage],
        enable_search: bool,
    ) -> list[ChatMessage]:
        """Apply search augmentation when requested and applicable."""
        if not enable_search:
            return list(messages)

        last = messages[-1]
        if last.role != "user" or not last.content.strip():
            return list(messages)

        results: list[SearchResult]
        try:
            results = await self.search_provider.search(last.content, self.search_results)
        except Exception as e:
            # Answer without search context
            logger.warning("chat_search_failed", error=str(e))
            results = []
        logger.info(
            "chat_search_augmented",
            provider=self.search_provider.provider_name,
            results=len(results),
        )
        return augment(messages, results)

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        enable_search: bool = False,
        cancel_token: CancellationToken | None = None,
    ) -> AsyncIterator[StreamEvent]:
        """Yield content events, then a done event or one error event.

        ``messages`` must already have passed :meth:`validate`. Caller
        cancellation ends the sequence without a terminal event.
        """
        outcome = "completed"
        logger.info(
            "chat_stream_started",
            messages=len(messages),
            enable_search=enable_search,
        )
        try:
            to_send = await self.prepare_messages(messages, enable_search)
            async with aclosing(
                self.completion_client.stream_completion(to_send, cancel_token=cancel_token)
            ) as deltas:
                async for delta in deltas:
                    yield StreamEvent.delta(delta)
            yield StreamEvent.completed()
        except StreamCancelled:
            outcome = "cancelled"
            logger.info("chat_stream_cancelled")
        except (GeneratorExit, asyncio.CancelledError):
            # Consumer went away mid-stream; nothing more can be sent
            outcome = "cancelled"
            logger.info("chat_stream_abandoned")
            raise
        except Exception as e:
            outcome = "failed"
            logger.exception("chat_stream_failed", error=str(e))
            yield StreamEvent.failure(STREAM_ERROR_MESSAGE)
        finally:
            CHAT_STREAMS.labels(outcome=outcome).inc()
