"""Search summary prompt v1."""

from collections.abc import Sequence

from studybolt.infrastructure.ai.prompts.base import PromptVersion


class SearchSummaryPromptV1:
    """Prompt for condensing a page of search results into a summary."""

    version = PromptVersion(
        version="1.0.0",
        name="search_summary",
        description="Concise research summary of web search results",
    )

    def render_system(self) -> str:
        return (
            "You are a research assistant. Provide a concise summary of the search "
            "results below, highlighting key points and insights."
        )

    def render_user(self, query: str, result_texts: Sequence[str]) -> str:
        joined = "\n\n".join(result_texts)
        return f'Please summarize these search results for the query "{query}":\n\n{joined}'
