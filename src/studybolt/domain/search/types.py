"""Search summary domain types."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Literal

SummarySource = Literal["cache", "fresh"]


@dataclass(frozen=True)
class SearchSummary:
    """Summarized search results, the payload stored in the cache."""

    query: str
    summary: str
    sources: list[dict[str, str]]
    timestamp: str  # ISO-8601, UTC

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> SearchSummary:
        data = json.loads(raw)
        return cls(
            query=data["query"],
            summary=data["summary"],
            sources=list(data["sources"]),
            timestamp=data["timestamp"],
        )
