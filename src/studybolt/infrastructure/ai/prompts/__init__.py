"""Versioned AI prompts.

Prompts are versioned as code so a change in wording is reviewable and
the version in use can be logged next to each request.
"""

from studybolt.infrastructure.ai.prompts.base import PromptVersion
from studybolt.infrastructure.ai.prompts.search_summary_v1 import SearchSummaryPromptV1
from studybolt.infrastructure.ai.prompts.study_assistant_v1 import StudyAssistantPromptV1

__all__ = ["PromptVersion", "SearchSummaryPromptV1", "StudyAssistantPromptV1"]
