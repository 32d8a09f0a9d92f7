"""Encode and decode the ``/search`` address-bar state."""

import re
from typing import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit

SEARCH_PATH = "/search"

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_page(value: str | None) -> int:
    """Parse a ``page`` parameter; anything unusable or below 1 becomes 1."""
    if not value:
        return 1
    match = _LEADING_INT_RE.match(value)
    if not match:
        return 1
    return max(1, int(match.group(1)))


def parse_search_params(params: Mapping[str, str] | str) -> tuple[str, int]:
    """
    Read ``(query, page)`` from URL parameters.

    Accepts either a mapping (e.g. Starlette ``QueryParams``) or a raw query
    string. ``q`` defaults to empty and ``page`` to 1.
    """
    if isinstance(params, str):
        params = dict(parse_qsl(params.lstrip("?"), keep_blank_values=True))
    return params.get("q") or "", parse_page(params.get("page"))


def build_search_url(query: str, page: int = 1, path: str = SEARCH_PATH) -> str:
    """Build the URL for a search; ``q`` is omitted when blank and ``page`` when 1."""
    params = []
    query = query.strip()
    if query:
        params.append(("q", query))
    if page > 1:
        params.append(("page", str(page)))
    if not params:
        return path
    return f"{path}?{urlencode(params)}"


def parse_search_url(url: str) -> tuple[str, int]:
    return parse_search_params(urlsplit(url).query)
