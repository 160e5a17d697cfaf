"""Browser-facing video search endpoint used by the XSEN frontend. Not protected by MCP auth."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from xsen_mcp.catalog.search import DEFAULT_LIMIT, rank
from xsen_mcp.catalog.urls import embed_url, thumbnail_url
from xsen_mcp.models.catalog import Match
from xsen_mcp.models.mcp import VideoResult, VideosResponse
from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

MAX_LIMIT = 50


def parse_limit(raw: str | None) -> int:
    """
    Reads the `limit` query parameter leniently.

    Missing, blank, non-numeric and non-positive values fall back to DEFAULT_LIMIT;
    values above MAX_LIMIT are capped.
    """
    try:
        limit = int(raw) if raw is not None else DEFAULT_LIMIT
    except ValueError:
        return DEFAULT_LIMIT
    if limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def to_video_result(match: Match, player_base_url: str) -> VideoResult:
    entry = match.entry
    return VideoResult(
        title=entry.display_title,
        thumbnail=thumbnail_url(entry.video_id),
        url=embed_url(player_base_url, entry.video_id),
        description=entry.description,
    )


@router.get("/videos")
async def search_videos(
    request: Request,
    query: str = Query(default="", description="Free-text search"),
    limit: str | None = Query(default=None, description="Maximum results, 3 when missing or invalid"),
) -> JSONResponse:
    """
    Ranks catalog videos against `query` and returns player links for the best matches.
    """
    if not query.strip():
        return JSONResponse(VideosResponse().model_dump(mode="json"))

    catalog = request.app.state.catalog_store.snapshot()
    if len(catalog) == 0:
        logger.warning("videos_search_catalog_unavailable", query=query)
        return JSONResponse({"error": "Video library still loading"}, status_code=503)

    player_base_url: str = request.app.state.config.xsen_player_url
    results = rank(catalog, query, parse_limit(limit))
    response = VideosResponse(
        results=[to_video_result(m, player_base_url) for m in results if m.entry.video_id]
    )
    logger.info("videos_search", query=results.query, matches=len(response.results))
    return JSONResponse(response.model_dump(mode="json"))
