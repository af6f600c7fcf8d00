from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


ResultType = Literal["research", "web"]
SearchType = Literal["all", "research", "web", "trends"]


class SearchResult(BaseModel):
    """Unified record every provider client produces.

    Provider-specific extras (journal, subreddit, categories, ...) are accepted as
    extra fields and serialized alongside the common ones.
    """

    model_config = ConfigDict(extra="allow")

    title: str = ""
    abstract: str = ""
    authors: List[str] = Field(default_factory=list)
    url: str
    published: str = ""
    source: str
    type: ResultType
    citations: int | float | None = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SearchRequest(BaseModel):
    query: str | None = None
    type: str | None = "all"

    @property
    def search_type(self) -> SearchType:
        if self.type in {"research", "web", "trends"}:
            return self.type  # type: ignore[return-value]
        return "all"


class HealthResponse(BaseModel):
    status: str
    env: str
    providers: List[str]
