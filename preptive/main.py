"""FastAPI application: search page, JSON search API and health checks."""

from pathlib import Path
from typing import Annotated

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from preptive.config import get_settings
from preptive.dependencies import get_search_service
from preptive.exceptions import ConfigurationError
from preptive.middleware.request_logging import RequestLoggingMiddleware
from preptive.models import SearchResponse
from preptive.query_service import QueryService
from preptive.search import RecordingNavigator, SearchController, build_search_url
from preptive.search.metadata import (
    SEARCH_DESCRIPTION,
    build_search_jsonld,
    canonical_url,
    format_date,
    page_title,
    result_summary,
)
from preptive.utils.logging import get_logger, setup_logging

settings = get_settings()
setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
logger = get_logger(__name__)

app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description="Search latest government exam notifications",
    debug=settings.debug,
)
app.add_middleware(RequestLoggingMiddleware)

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)
templates_env.filters["format_date"] = format_date


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}", extra={"endpoint": request.url.path})
    return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})


def _current_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    return url


async def _run_search(
    request: Request, q: str, page: str, service: QueryService | None
) -> SearchController:
    controller = SearchController(
        service,
        navigator=RecordingNavigator(_current_url(request)),
        page_size=settings.search_page_size,
    )
    if "q" in request.query_params and not q.strip():
        # A submitted blank box lists the latest published posts.
        await controller.submit_search()
    else:
        await controller.initialize({"q": q, "page": page})
    return controller


@app.get("/")
async def root():
    """Send visitors straight to the search experience."""
    return RedirectResponse(url="/search", status_code=302)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "preptive",
        "version": settings.app_version,
        "store_configured": bool(settings.supabase_url and settings.supabase_anon_key),
    }


@app.get("/search", response_class=HTMLResponse)
async def search_page(
    request: Request,
    q: Annotated[str, Query(description="Search query string")] = "",
    page: Annotated[str, Query(description="1-based results page")] = "1",
    service: QueryService | None = Depends(get_search_service),
):
    """Server-rendered search page."""
    controller = await _run_search(request, q, page, service)
    state = controller.state

    context = {
        "request": request,
        "state": state,
        "title": page_title(state.query),
        "description": SEARCH_DESCRIPTION,
        "canonical_url": canonical_url(state.query, settings.site_url),
        "jsonld": build_search_jsonld(state.query, settings.site_url),
        "summary": result_summary(state.total_count, state.searched_query),
        "prev_url": build_search_url(state.query, state.page - 1) if state.has_previous else None,
        "next_url": build_search_url(state.query, state.page + 1) if state.has_next else None,
    }
    template = templates_env.get_template("search.html")
    return HTMLResponse(content=template.render(**context))


@app.get("/api/search", response_model=SearchResponse)
async def search_api(
    request: Request,
    q: Annotated[str, Query(description="Search query string")] = "",
    page: Annotated[str, Query(description="1-based results page")] = "1",
    service: QueryService | None = Depends(get_search_service),
):
    """JSON view of the same search state the page renders."""
    controller = await _run_search(request, q, page, service)
    return controller.state.to_response()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("preptive.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
