"""Shared API schemas and base models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class APIRequestModel(BaseModel):
    """Base model for request bodies.

    Unknown fields are ignored so older frontends keep working; fields
    arrive in camelCase from the SPA.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class APIResponseModel(BaseModel):
    """Base model for response bodies serialized with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ----- Chat -----


class ChatRequest(APIRequestModel):
    """Request to stream a chat reply.

    ``messages`` is validated by the chat pipeline rather than by pydantic
    so malformed input gets the documented 400 body instead of a 422.
    """

    messages: Any = None
    enable_search: bool = Field(default=False, alias="enableSearch")


# ----- Search -----


class SearchRequest(APIRequestModel):
    """Request for a summarized web search."""

    query: Any = None
    num_results: Any = Field(default=None, alias="numResults")


class SourceItem(APIResponseModel):
    title: str
    snippet: str
    link: str
    id: str


class SearchResponse(APIResponseModel):
    """Summarized search results and where they came from."""

    source: Literal["cache", "fresh"]
    query: str
    summary: str
    sources: list[SourceItem]
    timestamp: str


# ----- Health -----


class HealthResponse(APIResponseModel):
    """Health check response."""

    status: Literal["ok"]
    timestamp: str
    agent_id: str = Field(alias="agentId")
    redis: Literal["connected"]


class HealthErrorResponse(APIResponseModel):
    status: Literal["error"]
    redis: Literal["disconnected"]
    error: str


class ErrorResponse(APIResponseModel):
    error: str
    message: str | None = None
