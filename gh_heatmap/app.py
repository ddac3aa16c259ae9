"""
FastAPI web application for gh-heatmap.

Provides REST API endpoints for activity series, summaries, grid layouts
and rendered SVG heatmaps.
"""

import logging
import threading

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field

from gh_heatmap.config import (
    CACHE_STRATEGY,
    GITHUB_REPOSITORY,
    GITHUB_TOKEN,
    THEME,
    get_cache_ttl,
    get_week_start,
    validate_config,
)
from gh_heatmap.github_client import GitHubClient, GitHubClientError
from gh_heatmap.activity_aggregator import (
    aggregate_commits,
    merge,
    series_from_list,
    series_to_list,
    summarize,
    total_count,
)
from gh_heatmap.date_index import DateRange, format_date, resolve_range
from gh_heatmap.grid_layout import build_geometry, build_grid
from gh_heatmap.label_placer import build_label_plan
from gh_heatmap.storage import MemoryCache, SQLiteCache, generate_cache_key
from gh_heatmap.svg_renderer import SVGOptions, render_svg

logger = logging.getLogger(__name__)

app = FastAPI(
    title="gh-heatmap",
    description="GitHub-style contribution heatmaps from repository commits",
    version="0.1.0",
)

_cache = None
_cache_lock = threading.Lock()


class ActivityQuery(BaseModel):
    """Request model for a single activity query."""

    start_date: str | None = Field(None, description="First day (YYYY-MM-DD)")
    end_date: str | None = Field(None, description="Last day (YYYY-MM-DD)")
    repository: str | None = Field(None, description="Repository as owner/repo")
    author: str | None = Field(None, description="Author login or email")
    branch: str | None = Field(None, description="Branch name")
    path: str | None = Field(None, description="File or directory path")


class CombinedRequest(BaseModel):
    """Request model for merging several queries into one series."""

    queries: list[ActivityQuery] = Field(..., min_length=1)


class AuthorsRequest(BaseModel):
    """Request model for per-author activity."""

    authors: list[str] = Field(..., min_length=1)
    start_date: str | None = None
    end_date: str | None = None
    repository: str | None = None
    branch: str | None = None
    path: str | None = None


class RepositoriesRequest(BaseModel):
    """Request model for per-repository activity."""

    repositories: list[str] = Field(..., min_length=1)
    start_date: str | None = None
    end_date: str | None = None
    author: str | None = None
    branch: str | None = None
    path: str | None = None


def get_cache():
    """Get the configured activity cache, creating it on first use."""
    global _cache
    with _cache_lock:
        if _cache is None:
            if CACHE_STRATEGY == "sqlite":
                _cache = SQLiteCache(default_ttl_seconds=get_cache_ttl())
            else:
                _cache = MemoryCache(default_ttl_seconds=get_cache_ttl())
        return _cache


def _check_config() -> None:
    try:
        validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")


def _resolve(query: ActivityQuery) -> tuple[str, DateRange]:
    """
    Validate a query's repository and dates.

    Raises:
        HTTPException: 400 when the repository is missing or dates are invalid
    """
    repository = query.repository or GITHUB_REPOSITORY
    if not repository:
        raise HTTPException(
            status_code=400,
            detail="repository is required (or set GITHUB_REPOSITORY)",
        )

    try:
        date_range = resolve_range(query.start_date, query.end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return repository, date_range


def _fetch_series(query: ActivityQuery) -> tuple[dict[str, int], str, DateRange]:
    """
    Fetch and aggregate commits for a query, using the cache when possible.

    Returns:
        Tuple of (series, repository, date_range)

    Raises:
        HTTPException: on invalid input or GitHub API errors
    """
    repository, date_range = _resolve(query)

    options = {
        "repository": repository,
        "start_date": format_date(date_range.start),
        "end_date": format_date(date_range.end),
        "author": query.author,
        "branch": query.branch,
        "path": query.path,
    }
    cache = get_cache()
    cache_key = generate_cache_key(options)
    cached = cache.get(cache_key)
    if cached is not None:
        logger.debug("Cache hit for %s", cache_key)
        return series_from_list(cached), repository, date_range

    client = GitHubClient(GITHUB_TOKEN)
    try:
        commits = client.list_commits(
            repository,
            options["start_date"],
            options["end_date"],
            author=query.author,
            branch=query.branch,
            path=query.path,
        )
    except GitHubClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    series = aggregate_commits(commits)
    cache.set(cache_key, series_to_list(series))
    return series, repository, date_range


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/activity")
def get_activity(
    start_date: str | None = None,
    end_date: str | None = None,
    repository: str | None = None,
    author: str | None = None,
    branch: str | None = None,
    path: str | None = None,
):
    """
    Get per-day commit counts for a repository.

    Returns:
        JSON with date-sorted {date, count} points and query metadata
    """
    _check_config()
    query = ActivityQuery(
        start_date=start_date,
        end_date=end_date,
        repository=repository,
        author=author,
        branch=branch,
        path=path,
    )
    series, repository, date_range = _fetch_series(query)

    return {
        "data": series_to_list(series),
        "meta": {
            "startDate": format_date(date_range.start),
            "endDate": format_date(date_range.end),
            "totalCommits": total_count(series),
            "repository": repository,
        },
    }


@app.get("/api/activity/summary")
def get_activity_summary(
    start_date: str | None = None,
    end_date: str | None = None,
    repository: str | None = None,
    author: str | None = None,
    branch: str | None = None,
    path: str | None = None,
):
    """
    Get summary statistics (streaks, totals, busiest day) for a repository.
    """
    _check_config()
    query = ActivityQuery(
        start_date=start_date,
        end_date=end_date,
        repository=repository,
        author=author,
        branch=branch,
        path=path,
    )
    series, _, date_range = _fetch_series(query)
    return {"summary": summarize(series, date_range)}


@app.post("/api/activity/combined")
def get_combined_activity(request: CombinedRequest):
    """
    Merge several queries into a single series by summing per-day counts.
    """
    _check_config()
    all_series = [_fetch_series(query)[0] for query in request.queries]
    merged = merge(all_series)

    return {
        "data": series_to_list(merged),
        "meta": {
            "totalQueries": len(request.queries),
            "totalCommits": total_count(merged),
        },
    }


@app.post("/api/activity/by-authors")
def get_activity_by_authors(request: AuthorsRequest):
    """Get a separate series for each author."""
    _check_config()
    data = {}
    for author in request.authors:
        query = ActivityQuery(**request.model_dump(exclude={"authors"}), author=author)
        data[author] = series_to_list(_fetch_series(query)[0])

    return {"data": data, "meta": {"authors": len(request.authors)}}


@app.post("/api/activity/by-repositories")
def get_activity_by_repositories(request: RepositoriesRequest):
    """Get a separate series for each repository."""
    _check_config()
    data = {}
    for repository in request.repositories:
        query = ActivityQuery(
            **request.model_dump(exclude={"repositories"}), repository=repository
        )
        data[repository] = series_to_list(_fetch_series(query)[0])

    return {"data": data, "meta": {"repositories": len(request.repositories)}}


@app.get("/api/layout")
def get_layout(
    start_date: str | None = None,
    end_date: str | None = None,
    repository: str | None = None,
    author: str | None = None,
    branch: str | None = None,
    path: str | None = None,
    week_start: int | None = Query(None, ge=0, le=1),
    cell_size: int = Query(10, ge=1, le=50),
    cell_gap: int = Query(3, ge=0, le=20),
):
    """
    Get the week-aligned grid, label placement and geometry for a renderer.
    """
    _check_config()
    query = ActivityQuery(
        start_date=start_date,
        end_date=end_date,
        repository=repository,
        author=author,
        branch=branch,
        path=path,
    )
    series, _, date_range = _fetch_series(query)

    if week_start is None:
        week_start = get_week_start()
    grid = build_grid(series, date_range, week_start)
    geometry = build_geometry(grid, cell_size=cell_size, cell_gap=cell_gap)
    plan = build_label_plan(grid, geometry.week_width)

    return {
        "grid": grid.to_dict(),
        "labels": plan.to_dict(),
        "geometry": {
            "width": geometry.width,
            "height": geometry.height,
            "week_width": geometry.week_width,
            "grid_offset_x": geometry.grid_offset_x,
            "grid_offset_y": geometry.grid_offset_y,
        },
    }


@app.get("/api/heatmap.svg")
def get_heatmap_svg(
    start_date: str | None = None,
    end_date: str | None = None,
    repository: str | None = None,
    author: str | None = None,
    branch: str | None = None,
    path: str | None = None,
    theme: str | None = None,
    week_start: int | None = Query(None, ge=0, le=1),
):
    """
    Render the heatmap as an SVG image.
    """
    _check_config()
    query = ActivityQuery(
        start_date=start_date,
        end_date=end_date,
        repository=repository,
        author=author,
        branch=branch,
        path=path,
    )
    series, _, date_range = _fetch_series(query)

    options = SVGOptions(
        theme=theme or THEME,
        week_start=get_week_start() if week_start is None else week_start,
        start_date=format_date(date_range.start),
        end_date=format_date(date_range.end),
    )
    svg = render_svg(series, options)
    return Response(content=svg, media_type="image/svg+xml")
