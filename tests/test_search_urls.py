"""Tests for /search URL encoding and parsing."""

import pytest

from preptive.search.urls import build_search_url, parse_page, parse_search_params, parse_search_url


def test_round_trip_query_and_page():
    url = build_search_url("ssc cgl", 2)
    assert url == "/search?q=ssc+cgl&page=2"
    assert parse_search_url(url) == ("ssc cgl", 2)


def test_page_one_is_omitted():
    assert build_search_url("upsc", 1) == "/search?q=upsc"


def test_blank_query_gives_bare_path():
    assert build_search_url("   ", 1) == "/search"
    assert build_search_url("", 3) == "/search?page=3"


def test_special_characters_are_encoded():
    url = build_search_url("a&b=c", 1)
    assert url == "/search?q=a%26b%3Dc"
    assert parse_search_url(url) == ("a&b=c", 1)


def test_defaults_when_params_missing():
    assert parse_search_params({}) == ("", 1)
    assert parse_search_params("") == ("", 1)


@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3), ("2abc", 2), ("abc", 1), ("0", 1), ("-4", 1), (None, 1), ("", 1)],
)
def test_parse_page(raw, expected):
    assert parse_page(raw) == expected


def test_parse_accepts_raw_query_string():
    assert parse_search_params("?q=railway%20group%20d&page=4") == ("railway group d", 4)
