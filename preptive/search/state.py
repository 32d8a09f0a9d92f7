"""Search page state and the pure reducer that evolves it."""

import math
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from preptive.models import Post, SearchResponse, SearchStatus

DEFAULT_PAGE_SIZE = 10


class SearchState(BaseModel):
    """Immutable snapshot of the search page."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    page: int = Field(default=1, ge=1)
    results: tuple[Post, ...] = ()
    total_count: int = Field(default=0, ge=0)
    is_loading: bool = False
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    # Token of the most recently issued fetch; completions carrying any other
    # token are stale.
    request_token: int = 0
    # (query, page) of the last executed search, None until one runs.
    last_fingerprint: tuple[str, int] | None = None

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1 and not self.is_loading

    @property
    def searched_query(self) -> str:
        return self.last_fingerprint[0] if self.last_fingerprint else ""

    @property
    def status(self) -> SearchStatus:
        if self.is_loading:
            return "loading"
        if self.results:
            return "loaded"
        if self.searched_query:
            return "empty"
        return "idle"

    def to_response(self) -> SearchResponse:
        return SearchResponse(
            query=self.query,
            page=self.page,
            page_size=self.page_size,
            total=self.total_count,
            total_pages=self.total_pages,
            has_previous=self.has_previous,
            has_next=self.has_next,
            status=self.status,
            items=list(self.results),
        )


class QueryChanged(BaseModel):
    """The search box text changed."""

    query: str


class PageSelected(BaseModel):
    page: int = Field(ge=1)


class SearchStarted(BaseModel):
    query: str
    page: int = Field(ge=1)
    token: int


class SearchSucceeded(BaseModel):
    token: int
    results: tuple[Post, ...]
    total_count: int = Field(ge=0)


class SearchFailed(BaseModel):
    token: int


class Cleared(BaseModel):
    pass


SearchEvent = Union[QueryChanged, PageSelected, SearchStarted, SearchSucceeded, SearchFailed, Cleared]


def reduce(state: SearchState, event: SearchEvent) -> SearchState:
    """Return the state that results from applying ``event`` to ``state``."""
    if isinstance(event, QueryChanged):
        return state.model_copy(update={"query": event.query})

    if isinstance(event, PageSelected):
        return state.model_copy(update={"page": event.page})

    if isinstance(event, SearchStarted):
        return state.model_copy(
            update={
                "query": event.query,
                "page": event.page,
                "is_loading": True,
                "request_token": event.token,
                "last_fingerprint": (event.query, event.page),
            }
        )

    if isinstance(event, (SearchSucceeded, SearchFailed)):
        if event.token != state.request_token:
            return state
        if isinstance(event, SearchFailed):
            return state.model_copy(update={"results": (), "total_count": 0, "is_loading": False})
        return state.model_copy(
            update={
                "results": tuple(event.results),
                "total_count": event.total_count,
                "is_loading": False,
            }
        )

    if isinstance(event, Cleared):
        # Bumping the token orphans any fetch still in flight.
        return SearchState(page_size=state.page_size, request_token=state.request_token + 1)

    raise TypeError(f"Unknown search event: {type(event).__name__}")
