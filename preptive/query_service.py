"""Remote posts store: query description and PostgREST client."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from preptive.exceptions import ConfigurationError, NetworkError, QueryServiceError
from preptive.models import Post

logger = logging.getLogger(__name__)

POST_COLUMNS = ("id", "slug", "title", "short_description", "published_at")
SEARCH_FIELDS = ("title", "short_description")

# Characters PostgREST treats as syntax inside logic-tree filters.
_RESERVED_RE = re.compile(r'[,.:()"\\]')
_CONTENT_RANGE_RE = re.compile(r"^(?:(\d+)-(\d+)|\*)/(\d+|\*)$")


@dataclass(frozen=True)
class PostsQuery:
    """A filtered, sorted, paginated request against the posts table."""

    offset: int
    limit: int
    search: str = ""
    status: str = "published"
    order_by: str = "published_at"
    descending: bool = True
    columns: tuple[str, ...] = POST_COLUMNS
    search_fields: tuple[str, ...] = SEARCH_FIELDS

    @classmethod
    def for_page(cls, query: str, page: int, page_size: int) -> "PostsQuery":
        """Page ``p`` covers rows ``[(p-1)*size, p*size - 1]``."""
        page = max(1, page)
        return cls(offset=(page - 1) * page_size, limit=page_size, search=query.strip())

    @property
    def range_end(self) -> int:
        return self.offset + self.limit - 1

    def range_header(self) -> str:
        return f"{self.offset}-{self.range_end}"

    def to_params(self) -> list[tuple[str, str]]:
        """Render as PostgREST query-string parameters."""
        params = [
            ("select", ",".join(self.columns)),
            ("status", f"eq.{self.status}"),
        ]
        if self.search:
            pattern = _quote_value(f"*{self.search}*")
            clauses = ",".join(f"{name}.ilike.{pattern}" for name in self.search_fields)
            params.append(("or", f"({clauses})"))
        direction = "desc" if self.descending else "asc"
        params.append(("order", f"{self.order_by}.{direction}"))
        return params


def _quote_value(value: str) -> str:
    """Double-quote a filter value when it contains PostgREST syntax characters."""
    if not _RESERVED_RE.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_content_range(header: str | None, offset: int, row_count: int) -> int:
    """
    Extract the exact total from a ``Content-Range`` header.

    Falls back to ``offset + row_count`` when the header is missing or the
    server did not report a total.
    """
    if not header:
        return offset + row_count
    match = _CONTENT_RANGE_RE.match(header.strip())
    if not match or match.group(3) == "*":
        return offset + row_count
    return int(match.group(3))


class QueryService(Protocol):
    """Anything that can run a ``PostsQuery`` and report an exact count."""

    async def fetch_posts(self, query: PostsQuery) -> tuple[list[Post], int]:
        ...


class PostgrestQueryService:
    """Async client for a Supabase/PostgREST posts table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "posts",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise ConfigurationError("Query service URL is required")
        if not api_key:
            raise ConfigurationError("Query service API key is required")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout
        self._transport = transport

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, query: PostsQuery) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
            "Range-Unit": "items",
            "Range": query.range_header(),
            "Prefer": "count=exact",
        }

    async def fetch_posts(self, query: PostsQuery) -> tuple[list[Post], int]:
        """
        Run ``query`` and return the page of posts plus the exact total.

        Raises:
            QueryServiceError: On non-2xx responses or malformed rows
            NetworkError: On transport errors
        """
        params = query.to_params()
        logger.debug(f"Posts query: {self.table_url} params={params} range={query.range_header()}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(query),
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(self.table_url, params=params)
            except httpx.RequestError as e:
                logger.error(f"Network error connecting to query service: {e}")
                raise NetworkError(f"Network error connecting to query service: {e}") from e

        content_range = response.headers.get("content-range")

        # Offset past the last row
        if response.status_code == 416:
            return [], parse_content_range(content_range, 0, 0)

        if response.is_error:
            error_text = response.text[:1000] if response.text else ""
            logger.error(
                f"Query service error {response.status_code}: "
                f"URL={self.table_url}, Params={params}, Response={error_text}"
            )
            raise QueryServiceError(
                status_code=response.status_code,
                message=f"API returned {response.status_code}",
                response_text=error_text,
            )

        try:
            payload: Any = response.json()
            rows = [Post.model_validate(row) for row in payload or []]
        except (ValueError, TypeError, ValidationError) as e:
            raise QueryServiceError(
                status_code=response.status_code,
                message=f"Malformed response: {e}",
                response_text=response.text[:1000],
            ) from e

        return rows, parse_content_range(content_range, query.offset, len(rows))
