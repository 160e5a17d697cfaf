from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.config import Config, get_config
from xsen_mcp.models.catalog import CatalogEntry
from xsen_mcp.models.mcp import ToolExecutionContext
from xsen_mcp.server import create_app

TEST_SECRET = "test-secret"
TEST_PLAYER_URL = "https://player.test"

# Environment variables read by Config; cleared so a developer's shell or .env cannot leak in
CONFIG_ENV_VARS = [
    "PORT",
    "SERVER_HOST",
    "LOG_LEVEL",
    "VIDEOS_URL",
    "XSEN_PLAYER_URL",
    "MCP_AUTH_KEY",
    "MCP_AUTH",
    "MCP_AUTH_REQUIRED",
    "CORS_ALLOWED_ORIGINS",
    "STATIC_DIR",
    "TOOL_SEARCH_MODE",
    "KEEPALIVE_ENABLED",
]

SAMPLE_VIDEOS: list[dict[str, Any]] = [
    {
        "OU Sooners videos": "Baker Mayfield Highlights",
        "Description": "2017 Heisman run",
        "URL": "https://youtu.be/abc123",
    },
    {
        "OU Sooners videos": "Kyler Murray Heisman Moments",
        "Description": "Best plays from the 2018 season",
        "URL": "https://www.youtube.com/watch?v=kyler18&t=30",
    },
    {
        "OU Sooners videos": "Red River Showdown Classics",
        "Description": "OU vs Texas rivalry games featuring Baker Mayfield",
        "URL": "https://www.youtube.com/watch?v=rrs001",
    },
    {
        "OU Sooners videos": "Sooner Schooner Tribute",
        "Description": "",
        "URL": "https://example.com/not-a-youtube-link",
    },
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from ambient configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def sample_entries() -> list[CatalogEntry]:
    return [CatalogEntry.model_validate(item) for item in SAMPLE_VIDEOS]


@pytest.fixture
def loaded_store(sample_entries: list[CatalogEntry]) -> CatalogStore:
    """A store that already holds the sample catalog."""
    store = CatalogStore("https://videos.test/videos.json")
    store.replace(sample_entries)
    return store


@pytest.fixture
def make_config():
    """Factory for an isolated Config with background tasks kept quiet."""

    def _factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {
            "videos_url": "https://videos.test/videos.json",
            "xsen_player_url": TEST_PLAYER_URL,
            "keepalive_enabled": False,
            "catalog_initial_delay_seconds": 3600,
            "cors_allowed_origins": "*",
        }
        values.update(overrides)
        return Config(_env_file=None, **values)

    return _factory


@pytest.fixture
def client(make_config, loaded_store: CatalogStore) -> Iterator[TestClient]:
    """Test client for an app with auth enabled and the sample catalog loaded."""
    app = create_app(make_config(mcp_auth_key=TEST_SECRET), store=loaded_store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TEST_SECRET}"}


@pytest.fixture
def mock_context() -> ToolExecutionContext:
    """Provides a ToolExecutionContext with a mock logger."""
    return ToolExecutionContext(correlation_id="test-corr-id", logger=MagicMock())

