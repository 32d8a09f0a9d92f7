"""Search orchestration: URL sync, de-duplicated fetches, fail-soft errors."""

import itertools
from typing import Mapping, Protocol

from preptive.exceptions import ConfigurationError, PreptiveAppError
from preptive.query_service import PostsQuery, QueryService
from preptive.search.state import (
    DEFAULT_PAGE_SIZE,
    Cleared,
    PageSelected,
    QueryChanged,
    SearchEvent,
    SearchFailed,
    SearchStarted,
    SearchState,
    SearchSucceeded,
    reduce,
)
from preptive.search.urls import SEARCH_PATH, build_search_url, parse_search_params
from preptive.utils.logging import get_logger

logger = get_logger(__name__)


class Navigator(Protocol):
    """Address-bar handle. ``replace`` must not add a history entry."""

    current_url: str

    def replace(self, url: str, *, scroll: bool = False) -> None:
        ...


class RecordingNavigator:
    """Navigator that records replacements instead of touching a browser."""

    def __init__(self, current_url: str = SEARCH_PATH):
        self.current_url = current_url
        self.history: list[str] = []

    def replace(self, url: str, *, scroll: bool = False) -> None:
        self.current_url = url
        self.history.append(url)


class SearchController:
    """
    Drives the search page.

    State lives in an immutable ``SearchState`` that only changes through
    ``reduce``. Every fetch gets a fresh token so a slow response for an
    older search cannot overwrite a newer one.
    A controller without a service can only render the idle page.
    """

    def __init__(
        self,
        service: QueryService | None,
        navigator: Navigator | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.service = service
        self.navigator = navigator or RecordingNavigator()
        self.state = SearchState(page_size=page_size)
        self._tokens = itertools.count(1)

    def dispatch(self, event: SearchEvent) -> SearchState:
        self.state = reduce(self.state, event)
        return self.state

    async def initialize(self, params: Mapping[str, str] | str) -> SearchState:
        """Load ``q``/``page`` from the URL and search right away when ``q`` is set."""
        query, page = parse_search_params(params)
        self.dispatch(QueryChanged(query=query))
        self.dispatch(PageSelected(page=page))
        if query:
            await self.search(query, page)
        return self.state

    def set_query(self, query: str) -> SearchState:
        return self.dispatch(QueryChanged(query=query))

    def _clamp_page(self, query: str, page: int) -> int:
        page = max(1, page)
        # The known total only describes the query it was fetched for.
        total_pages = self.state.total_pages
        if query == self.state.searched_query and total_pages > 0:
            page = min(page, total_pages)
        return page

    async def search(self, query: str | None = None, page: int | None = None) -> bool:
        """
        Fetch one page of results.

        Returns False when skipped because (query, page) matches the last
        executed search. Fetch failures are logged and end in an empty result
        set; they are never raised to the caller.
        """
        query = self.state.query if query is None else query
        page = self._clamp_page(query, self.state.page if page is None else page)

        if self.state.last_fingerprint == (query, page):
            logger.debug("Skipping duplicate search", extra={"query": query, "page": page})
            return False

        if self.service is None:
            raise ConfigurationError("No query service is configured for this search")

        token = next(self._tokens)
        self.dispatch(SearchStarted(query=query, page=page, token=token))

        posts_query = PostsQuery.for_page(query, page, self.state.page_size)
        try:
            posts, total = await self.service.fetch_posts(posts_query)
        except PreptiveAppError as e:
            logger.error(
                f"Search error: {e}",
                extra={"query": query, "page": page, "token": token, "error": str(e)},
            )
            self.dispatch(SearchFailed(token=token))
            return True
        except Exception as e:
            logger.exception(
                f"Unexpected search error: {type(e).__name__}: {e}",
                extra={"query": query, "page": page, "token": token},
            )
            self.dispatch(SearchFailed(token=token))
            return True

        state = self.dispatch(SearchSucceeded(token=token, results=tuple(posts), total_count=total))
        if state.request_token != token:
            logger.info("Discarded stale search response", extra={"query": query, "page": page, "token": token})
            return True

        logger.info(
            f"Search successful: {len(posts)} items for query '{query}'",
            extra={"query": query, "page": page, "total": total},
        )
        # A deep link past the end only learns the real page count now.
        if page > state.total_pages > 0:
            last_page = state.total_pages
            logger.info(
                f"Page {page} is past the last page, loading page {last_page}",
                extra={"query": query, "page": last_page, "total": total},
            )
            self._replace_url(build_search_url(query, last_page))
            await self.search(query, last_page)
        return True

    def _replace_url(self, url: str) -> None:
        if self.navigator.current_url != url:
            self.navigator.replace(url, scroll=False)

    async def submit_search(self) -> SearchState:
        """Search the current box text from page 1 and sync the URL."""
        query = self.state.query.strip()
        self.dispatch(QueryChanged(query=query))
        self.dispatch(PageSelected(page=1))
        self._replace_url(build_search_url(query, 1))
        await self.search(query, 1)
        return self.state

    async def change_page(self, new_page: int) -> bool:
        """Move to ``new_page``; ignored when outside ``[1, total_pages]``."""
        if new_page < 1 or new_page > self.state.total_pages:
            return False
        # Page counts belong to the last executed query, not unsubmitted box text.
        query = self.state.searched_query if self.state.last_fingerprint else self.state.query.strip()
        self.dispatch(QueryChanged(query=query))
        self.dispatch(PageSelected(page=new_page))
        self._replace_url(build_search_url(query, new_page))
        await self.search(query, new_page)
        return True

    def clear(self) -> SearchState:
        self.dispatch(Cleared())
        self._replace_url(SEARCH_PATH)
        return self.state
