"""Study assistant prompt v1 - search-augmented answers."""

from studybolt.infrastructure.ai.prompts.base import PromptVersion

CONTEXT_SEPARATOR = "\n\n---\n\n"


class StudyAssistantPromptV1:
    """System prompt injected when chat is augmented with web search.

    The prompt names the StudyBolt persona and carries the retrieved
    search context verbatim at its end.
    """

    version = PromptVersion(
        version="1.0.0",
        name="study_assistant",
        description="StudyBolt persona with web search context",
    )

    def render_system(self, context: str) -> str:
        """Render the system prompt around a pre-formatted context block."""
        return f"""You are StudyBolt, an AI study assistant. You have access to current web search results to provide accurate, up-to-date information.

When answering:
- Use the search results provided to give comprehensive answers
- Cite sources when making specific claims
- If search results don't fully answer the question, acknowledge limitations
- Focus on being helpful for studying and learning
- Structure responses clearly with proper formatting

Current search results:
{context}"""
