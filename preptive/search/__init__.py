"""Search page state, URL handling and orchestration."""

from preptive.search.controller import Navigator, RecordingNavigator, SearchController
from preptive.search.state import SearchState, reduce
from preptive.search.urls import build_search_url, parse_search_params, parse_search_url

__all__ = [
    "Navigator",
    "RecordingNavigator",
    "SearchController",
    "SearchState",
    "build_search_url",
    "parse_search_params",
    "parse_search_url",
    "reduce",
]
