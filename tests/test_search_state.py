"""Tests for the search state reducer."""

import pytest

from preptive.search.state import (
    Cleared,
    PageSelected,
    QueryChanged,
    SearchFailed,
    SearchStarted,
    SearchState,
    SearchSucceeded,
    reduce,
)
from tests.factories import make_post


@pytest.mark.parametrize("total, pages", [(0, 0), (1, 1), (10, 1), (11, 2), (23, 3), (100, 10)])
def test_total_pages_is_ceiling(total, pages):
    assert SearchState(total_count=total).total_pages == pages


def test_initial_state_is_idle():
    state = SearchState()
    assert state.status == "idle"
    assert state.page == 1
    assert not state.show_pagination


def test_started_then_succeeded():
    state = reduce(SearchState(), SearchStarted(query="upsc", page=1, token=1))
    assert state.status == "loading"
    assert state.last_fingerprint == ("upsc", 1)

    posts = (make_post(1), make_post(2))
    state = reduce(state, SearchSucceeded(token=1, results=posts, total_count=23))
    assert state.status == "loaded"
    assert state.results == posts
    assert state.total_pages == 3
    assert state.has_next and not state.has_previous
    assert state.show_pagination


def test_no_rows_for_query_is_empty():
    state = reduce(SearchState(), SearchStarted(query="zzz-no-match", page=1, token=1))
    state = reduce(state, SearchSucceeded(token=1, results=(), total_count=0))
    assert state.status == "empty"


def test_no_rows_for_blank_query_is_idle():
    state = reduce(SearchState(), SearchStarted(query="", page=1, token=1))
    state = reduce(state, SearchSucceeded(token=1, results=(), total_count=0))
    assert state.status == "idle"


def test_failure_clears_results():
    state = SearchState(results=(make_post(1),), total_count=5)
    state = reduce(state, SearchStarted(query="ssc", page=1, token=2))
    state = reduce(state, SearchFailed(token=2))
    assert state.results == ()
    assert state.total_count == 0
    assert state.is_loading is False


def test_stale_completion_is_ignored():
    state = reduce(SearchState(), SearchStarted(query="old", page=1, token=1))
    state = reduce(state, SearchStarted(query="new", page=1, token=2))
    after = reduce(state, SearchSucceeded(token=1, results=(make_post(9),), total_count=1))
    assert after is state
    assert after.is_loading


def test_clear_resets_and_orphans_inflight_fetch():
    state = reduce(SearchState(), QueryChanged(query="upsc"))
    state = reduce(state, SearchStarted(query="upsc", page=2, token=4))
    state = reduce(state, Cleared())
    assert (state.query, state.page, state.results, state.total_count) == ("", 1, (), 0)
    assert state.last_fingerprint is None
    assert reduce(state, SearchSucceeded(token=4, results=(make_post(1),), total_count=1)) is state


def test_page_selected_keeps_query():
    state = reduce(SearchState(query="bank po"), PageSelected(page=3))
    assert (state.query, state.page) == ("bank po", 3)


def test_reducer_does_not_mutate_input():
    original = SearchState()
    reduce(original, QueryChanged(query="ssc"))
    assert original.query == ""
