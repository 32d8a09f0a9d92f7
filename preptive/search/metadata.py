"""SEO metadata and display helpers for the search page."""

from datetime import datetime
from typing import Any
from urllib.parse import quote

SITE_NAME = "PrepTive"
DEFAULT_HEADLINE = "Latest Exam Updates"
SEARCH_DESCRIPTION = (
    "Search for latest government exam notifications, syllabus, admit card, results, "
    "and important dates for SSC, UPSC, Banking, Railway exams."
)


def page_title(query: str) -> str:
    return f"Search Results: {query.strip() or DEFAULT_HEADLINE} | {SITE_NAME}"


def canonical_url(query: str, site_url: str = "https://www.preptive.in") -> str:
    url = f"{site_url.rstrip('/')}/search"
    query = query.strip()
    if query:
        url += f"?q={quote(query, safe='')}"
    return url


def build_search_jsonld(query: str, site_url: str = "https://www.preptive.in") -> dict[str, Any]:
    """Structured-data block (schema.org ``SearchResultsPage``) for the page head."""
    return {
        "@context": "https://schema.org",
        "@type": "SearchResultsPage",
        "name": page_title(query),
        "description": SEARCH_DESCRIPTION,
        "url": canonical_url(query, site_url),
    }


def result_summary(total: int, query: str) -> str:
    noun = "result" if total == 1 else "results"
    return f'Found {total} {noun} for "{query}"'


def format_date(value: datetime | str | None) -> str:
    """Render a publication timestamp as e.g. ``16 Oct 2026``."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value.day} {value:%b %Y}"
