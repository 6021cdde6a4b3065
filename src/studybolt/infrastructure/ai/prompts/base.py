"""Prompt metadata shared by all prompt versions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PromptVersion:
    """Prompt version metadata."""

    version: str
    name: str
    description: str
