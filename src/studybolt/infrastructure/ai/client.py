"""Mistral Agents API client wrapper."""

import asyncio
import time
from collections.abc import AsyncIterator, Sequence
from typing import Any

import httpx
from mistralai import Mistral, models
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from studybolt.domain.chat.types import ChatMessage, ensure_single_leading_system
from studybolt.observability.metrics import UPSTREAM_ERRORS
from studybolt.shared.cancellation import CancellationToken
from studybolt.shared.exceptions import (
    ExternalServiceError,
    NetworkError,
    UpstreamError,
    ValidationError,
)
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "mistral"


def _content_text(content: Any) -> str:
    """Flatten Mistral message content (str or list of chunks) to text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(getattr(chunk, "text", "") or "" for chunk in content)
    return str(content)


class MistralAgentClient:
    """Wrapper for a pre-configured Mistral agent.

    Features:
    - One-shot completion and incremental streaming against one agent id
    - Bounded timeouts on every upstream call
    - SDK errors translated to UpstreamError/NetworkError
    - Cooperative cancellation of streams
    - Structured logging
    """

    def __init__(
        self,
        sdk: Mistral,
        agent_id: str,
        timeout_seconds: float = 60.0,
        max_attempts: int = 1,
    ) -> None:
        if not agent_id:
            raise ValueError("MISTRAL_AGENT_ID is not configured")
        self.sdk = sdk
        self.agent_id = agent_id
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts

    @staticmethod
    def _prepare(messages: Sequence[ChatMessage]) -> list[dict[str, str]]:
        if not messages:
            raise ValidationError("Messages array is required")
        ensure_single_leading_system(messages)
        return [message.to_dict() for message in messages]

    def _translate(self, exc: Exception) -> ExternalServiceError:
        """Map SDK and transport exceptions onto the service taxonomy."""
        if isinstance(exc, ExternalServiceError):
            return exc
        if isinstance(exc, models.HTTPValidationError):
            return UpstreamError(
                "Mistral rejected the request", service=SERVICE_NAME, status_code=422
            )
        if isinstance(exc, models.SDKError):
            return UpstreamError(
                f"Mistral API error: {exc.status_code}",
                service=SERVICE_NAME,
                status_code=exc.status_code,
            )
        if isinstance(exc, (httpx.RequestError, TimeoutError)):
            return NetworkError(
                f"Connection to Mistral failed: {exc!r}", service=SERVICE_NAME
            )
        return UpstreamError(f"Unexpected Mistral error: {exc}", service=SERVICE_NAME)

    async def complete_once(self, messages: Sequence[ChatMessage]) -> str:
        """Send the conversation to the agent and return the full reply.

        Args:
            messages: Conversation, at most one leading system message

        Returns:
            Reply text (empty string if the agent returned no content)

        Raises:
            ValidationError: If messages is empty or malformed
            UpstreamError: Non-success status from Mistral
            NetworkError: Mistral could not be reached or timed out
        """
        payload = self._prepare(messages)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            retry=retry_if_exception_type(ExternalServiceError),
            reraise=True,
        )
        return await retrying(self._complete, payload)

    async def _complete(self, payload: list[dict[str, str]]) -> str:
        start_time = time.monotonic()
        try:
            async with asyncio.timeout(self.timeout_seconds):
                response = await self.sdk.agents.complete_async(
                    agent_id=self.agent_id,
                    messages=payload,
                )
        except Exception as e:
            error = self._translate(e)
            UPSTREAM_ERRORS.labels(service=SERVICE_NAME).inc()
            logger.error("agent_completion_failed", error=error.message, details=error.details)
            raise error from e

        choices = getattr(response, "choices", None) or []
        content = _content_text(choices[0].message.content) if choices else ""
        usage = getattr(response, "usage", None)
        logger.debug(
            "agent_completion_success",
            agent_id=self.agent_id,
            input_tokens=getattr(usage, "prompt_tokens", None),
            output_tokens=getattr(usage, "completion_tokens", None),
            latency_ms=round((time.monotonic() - start_time) * 1000, 2),
        )
        return content

    async def stream_completion(
        self,
        messages: Sequence[ChatMessage],
        cancel_token: CancellationToken | None = None,
    ) -> AsyncIterator[str]:
        """Stream the agent's reply as text deltas, in arrival order.

        The upstream response is closed when the iterator finishes, fails,
        is cancelled through ``cancel_token`` or is closed by the consumer.

        Raises:
            ValidationError: If messages is empty or malformed
            UpstreamError: Non-success status from Mistral
            NetworkError: Connection dropped or a fragment timed out
            StreamCancelled: ``cancel_token`` fired
        """
        payload = self._prepare(messages)
        start_time = time.monotonic()
        fragments = 0

        try:
            async with asyncio.timeout(self.timeout_seconds):
                stream = await self.sdk.agents.stream_async(
                    agent_id=self.agent_id,
                    messages=payload,
                )
        except Exception as e:
            error = self._translate(e)
            UPSTREAM_ERRORS.labels(service=SERVICE_NAME).inc()
            logger.error("agent_stream_open_failed", error=error.message, details=error.details)
            raise error from e

        async with stream as events:
            iterator = aiter(events)
            while True:
                if cancel_token is not None:
                    await cancel_token.raise_if_cancelled()
                try:
                    async with asyncio.timeout(self.timeout_seconds):
                        event = await anext(iterator)
                except StopAsyncIteration:
                    break
                except Exception as e:
                    error = self._translate(e)
                    UPSTREAM_ERRORS.labels(service=SERVICE_NAME).inc()
                    logger.error(
                        "agent_stream_interrupted",
                        error=error.message,
                        fragments=fragments,
                    )
                    raise error from e

                choices = getattr(event.data, "choices", None) or []
                if not choices:
                    continue
                text = _content_text(choices[0].delta.content)
                if text:
                    fragments += 1
                    yield text

        logger.debug(
            "agent_stream_finished",
            agent_id=self.agent_id,
            fragments=fragments,
            latency_ms=round((time.monotonic() - start_time) * 1000, 2),
        )

    async def close(self) -> None:
        """Release the SDK's HTTP clients."""
        async_client = getattr(getattr(self.sdk, "sdk_configuration", None), "async_client", None)
        if async_client is not None:
            await async_client.aclose()
