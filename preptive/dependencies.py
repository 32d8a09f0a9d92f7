"""FastAPI dependencies."""

from fastapi import Request

from preptive.config import get_settings
from preptive.exceptions import ConfigurationError
from preptive.query_service import PostgrestQueryService, QueryService


def get_query_service() -> QueryService:
    """Get the posts query service via dependency injection."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_ANON_KEY must be configured. Please set them in .env"
        )
    return PostgrestQueryService(
        base_url=settings.supabase_url,
        api_key=settings.supabase_anon_key,
        table=settings.posts_table,
        timeout=settings.supabase_timeout,
    )


def get_search_service(request: Request) -> QueryService | None:
    """Query service for a search page, or None when the request carries no ``q`` at all."""
    if "q" not in request.query_params:
        return None
    return get_query_service()
