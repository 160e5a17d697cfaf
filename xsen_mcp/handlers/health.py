"""Liveness and status endpoint handlers."""

import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.models.mcp import SERVICE_NAME, StatusResponse

router = APIRouter()


def build_status(store: CatalogStore, started_at: float) -> StatusResponse:
    """Current service status, counting videos in a single catalog snapshot."""
    return StatusResponse(
        status="ok",
        service=SERVICE_NAME,
        videos=len(store.snapshot()),
        uptime=round(time.monotonic() - started_at, 3),
    )


@router.get("/")
async def status(request: Request) -> JSONResponse:
    """
    Returns the service status, including the number of videos loaded.
    """
    response_model = build_status(request.app.state.catalog_store, request.app.state.started_at)
    return JSONResponse(content=response_model.model_dump(mode="json"))


@router.get("/health")
async def health() -> PlainTextResponse:
    """Health check endpoint for platform probes."""
    return PlainTextResponse("OK")
