"""
Main ASGI Server.

A single FastAPI application serving the MCP JSON-RPC endpoint, the
browser-facing video search, status/health probes and optional static files.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.config import Config, get_config
from xsen_mcp.handlers.health import router as health_router
from xsen_mcp.handlers.jsonrpc_mcp import JSONRPCDispatcher
from xsen_mcp.handlers.jsonrpc_mcp import router as mcp_router
from xsen_mcp.handlers.videos import router as videos_router
from xsen_mcp.handlers.auth import BearerTokenAuth
from xsen_mcp.models.mcp import SERVER_VERSION, SERVICE_NAME
from xsen_mcp.registry.tool_registry import register_all_tools
from xsen_mcp.utils import keepalive
from xsen_mcp.utils.logging import get_logger
from xsen_mcp.utils.scheduler import PeriodicTask

logger = get_logger(__name__)


def build_background_tasks(config: Config, store: CatalogStore) -> list[PeriodicTask]:
    """Catalog refresh and, when enabled, the keep-alive ping."""
    tasks = [
        PeriodicTask(
            "catalog_refresh",
            store.load,
            interval=config.catalog_refresh_interval_seconds,
            initial_delay=config.catalog_initial_delay_seconds,
        )
    ]
    if config.keepalive_enabled:
        tasks.append(
            PeriodicTask(
                "keepalive",
                partial(keepalive.ping, f"http://127.0.0.1:{config.port}/health"),
                interval=config.keepalive_interval_seconds,
                initial_delay=config.keepalive_interval_seconds,
            )
        )
    return tasks


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start background tasks after startup and stop them on shutdown."""
    config: Config = app.state.config
    logger.info(
        "Starting XSEN Video MCP",
        version=SERVER_VERSION,
        environment=config.environment,
        log_level=config.log_level,
        videos_url=config.videos_url,
        auth_required=config.auth_required,
        tool_search_mode=config.tool_search_mode,
    )

    tasks = build_background_tasks(config, app.state.catalog_store)
    for task in tasks:
        task.start()
    app.state.background_tasks = tasks
    try:
        yield
    finally:
        for task in tasks:
            await task.stop()
        logger.info("Shutting down XSEN Video MCP")


def create_app(config: Config | None = None, store: CatalogStore | None = None) -> FastAPI:
    """
    Builds the application.

    Args:
        config: Settings to use; defaults to the cached environment configuration.
        store: Catalog store to serve from; defaults to one reading `config.videos_url`.
    """
    config = config or get_config()
    store = store or CatalogStore(
        config.videos_url, timeout=config.catalog_fetch_timeout_seconds
    )

    app = FastAPI(
        title=SERVICE_NAME,
        description="MCP tool server for OU Sooners video highlights with XSEN embedded players.",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.catalog_store = store
    app.state.started_at = time.monotonic()

    registry = register_all_tools(store, config)
    app.state.registry = registry
    app.state.dispatcher = JSONRPCDispatcher(
        registry, BearerTokenAuth(config.auth_secret, required=config.auth_required)
    )
    logger.info("Tool registry ready", tools=registry.get_registered_tool_names())

    if not config.auth_required:
        logger.warning("MCP authentication is disabled. Set MCP_AUTH_KEY to protect /mcp.")

    app.include_router(health_router)
    app.include_router(videos_router)
    app.include_router(mcp_router)

    # Mounted last so API routes take precedence over files with the same path
    if config.static_dir:
        app.mount("/", StaticFiles(directory=config.static_dir), name="static")
        logger.info("Serving static files", directory=config.static_dir)

    origins = config.cors_origins
    if origins:
        logger.info("CORS middleware enabled", allowed_origins=origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return app
