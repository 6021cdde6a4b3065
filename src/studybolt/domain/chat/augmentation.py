"""Search context augmentation for chat conversations."""

from collections.abc import Sequence

from studybolt.domain.chat.types import ChatMessage
from studybolt.infrastructure.ai.prompts.study_assistant_v1 import (
    CONTEXT_SEPARATOR,
    StudyAssistantPromptV1,
)
from studybolt.infrastructure.search.base import SearchResult

_PROMPT = StudyAssistantPromptV1()


def format_context(results: Sequence[SearchResult]) -> str:
    """Join results as ``[title]\\nsnippet\\nSource: link`` blocks, in input order."""
    return CONTEXT_SEPARATOR.join(
        f"[{result.title}]\n{result.snippet}\nSource: {result.link}" for result in results
    )


def augment(
    history: Sequence[ChatMessage],
    results: Sequence[SearchResult],
) -> list[ChatMessage]:
    """Prepend a system message carrying the search context to ``history``.

    Pure: the input messages are returned unchanged and in order after the
    synthesized system message. Caller-supplied leading system messages
    are folded into the synthesized one, so the result never has more than
    one leading system message. Empty ``results`` still yields the system
    message with an empty context block.
    """
    system_content = _PROMPT.render_system(format_context(results))

    rest = list(history)
    while rest and rest[0].role == "system":
        system_content = f"{system_content}\n\n{rest[0].content}"
        rest = rest[1:]

    return [ChatMessage(role="system", content=system_content), *rest]
