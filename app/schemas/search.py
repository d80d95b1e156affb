"""Schemas for the search pipeline and its endpoints."""

from enum import Enum

from pydantic import BaseModel, Field


class SearchServiceType(str, Enum):
    """Backend selected for one query. Exactly one adapter per invocation."""

    WEATHER = "weather"
    WIKIPEDIA = "wikipedia"
    NEWS = "news"
    SEARCH = "search"
    GITHUB_TRENDING = "github_trending"
    GITHUB_REPO = "github_repo"
    URL_CONTENT = "url_content"
    NONE = "none"


class SearchResult(BaseModel):
    """Normalized output of a source adapter. Content is already truncated for the summarizer."""

    source: str = Field(..., description="Tag of the adapter that produced this result.")
    content: str = Field(..., description="Human-readable text.")
    confidence: float = Field(0.5, ge=0.0, le=1.0, description="Informational only; not used for ranking.")


class SearchRequest(BaseModel):
    """Request body for POST /search."""

    query: str = Field(..., min_length=1, description="Raw user query.")


class SearchResponse(BaseModel):
    """Response for POST /search. Empty answer means 'proceed without augmentation'."""

    answer: str = Field("", description="Summarized information, or empty string.")
    service: SearchServiceType | None = Field(None, description="Service selected for the query, if search was needed.")
    source: str | None = Field(None, description="Adapter that produced the content, if any.")
    fallback_used: bool = Field(False, description="True when the web search fallback ran.")


class ChatRequest(BaseModel):
    """Request body for POST /chat."""

    question: str = Field(..., min_length=1, description="User message for the chat persona.")


class ChatResponse(BaseModel):
    """Response for POST /chat."""

    answer: str = Field(..., description="Final answer from the chat model.")
    augmented: bool = Field(False, description="True when search results were injected into the prompt.")


class ToolRequest(BaseModel):
    """Request body for the MCP tool endpoints."""

    query: str = ""
