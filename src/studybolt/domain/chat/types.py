"""Shared chat domain types."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from studybolt.shared.exceptions import ValidationError

Role = Literal["system", "user", "assistant"]
ROLES: frozenset[str] = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True)
class ChatMessage:
    """A message in the chat conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ChatMessage:
        role = raw.get("role")
        content = raw.get("content")
        if role not in ROLES:
            raise ValidationError("Invalid message role", {"role": role})
        if not isinstance(content, str):
            raise ValidationError("Message content must be a string", {"role": role})
        return cls(role=role, content=content)


def ensure_single_leading_system(messages: Iterable[ChatMessage]) -> None:
    """Raise if more than one system message leads the conversation."""
    leading = 0
    for message in messages:
        if message.role != "system":
            break
        leading += 1
    if leading > 1:
        raise ValidationError(
            "At most one leading system message is allowed",
            {"leading_system_messages": leading},
        )


@dataclass(frozen=True)
class StreamEvent:
    """One framed chunk of a chat stream.

    Exactly one of ``content``/``error`` is set, or ``done`` is True.
    """

    content: str | None = None
    error: str | None = None
    done: bool = False

    @classmethod
    def delta(cls, content: str) -> StreamEvent:
        return cls(content=content)

    @classmethod
    def failure(cls, message: str) -> StreamEvent:
        return cls(error=message)

    @classmethod
    def completed(cls) -> StreamEvent:
        return cls(done=True)
