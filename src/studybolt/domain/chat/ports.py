"""Ports for chat pipeline dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from studybolt.domain.chat.types import ChatMessage
from studybolt.infrastructure.search.base import SearchResult
from studybolt.shared.cancellation import CancellationToken


class CompletionClientPort(Protocol):
    """Hosted agent interface used by the chat and summary pipelines."""

    async def complete_once(self, messages: Sequence[ChatMessage]) -> str:
        """Return the agent's full reply."""

    def stream_completion(
        self,
        messages: Sequence[ChatMessage],
        cancel_token: CancellationToken | None = None,
    ) -> AsyncIterator[str]:
        """Yield reply text deltas as they arrive."""


class SearchProviderPort(Protocol):
    """Web search interface."""

    @property
    def provider_name(self) -> str:
        """Provider name for logging."""

    async def search(self, query: str, limit: int = 5) -> list[SearchResult]:
        """Search; an empty list on provider failure."""

    async def fetch(self, query: str, limit: int = 5) -> list[SearchResult]:
        """Search; raises on provider failure."""
