"""Pydantic models for data structures."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SearchStatus = Literal["idle", "loading", "loaded", "empty"]


class Post(BaseModel):
    """Read-only projection of a published post row."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    slug: str
    title: str
    short_description: str | None = None
    published_at: datetime


class SearchResponse(BaseModel):
    """Search state as returned by the JSON API."""

    query: str
    page: int
    page_size: int
    total: int = 0
    total_pages: int = 0
    has_previous: bool = False
    has_next: bool = False
    status: SearchStatus = "idle"
    items: list[Post] = Field(default_factory=list)
