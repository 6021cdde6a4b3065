"""Chat domain module.

Modules:
- types: ChatMessage and StreamEvent
- augmentation: search context injection
- pipeline: ChatPipeline orchestrating search and streamed completion
- ports: protocols for the agent and search collaborators
"""

from studybolt.domain.chat.augmentation import augment, format_context
from studybolt.domain.chat.pipeline import ChatPipeline
from studybolt.domain.chat.types import ChatMessage, StreamEvent

__all__ = [
    "ChatMessage",
    "ChatPipeline",
    "StreamEvent",
    "augment",
    "format_context",
]
