"""Integration tests for the browser-facing /videos endpoint."""

import pytest
from fastapi.testclient import TestClient

from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.handlers.videos import parse_limit
from xsen_mcp.server import create_app
from tests.conftest import TEST_PLAYER_URL


def test_videos_returns_ranked_results(client: TestClient) -> None:
    response = client.get("/videos", params={"query": "baker"})

    assert response.status_code == 200
    results = response.json()["results"]
    assert [r["title"] for r in results] == [
        "Baker Mayfield Highlights",
        "Red River Showdown Classics",
    ]
    first = results[0]
    assert first["url"] == f"{TEST_PLAYER_URL}?v=abc123"
    assert first["thumbnail"] == "https://img.youtube.com/vi/abc123/hqdefault.jpg"
    assert first["duration"] == "—"
    assert first["description"] == "2017 Heisman run"


def test_videos_needs_no_credentials(client: TestClient) -> None:
    assert client.get("/videos", params={"query": "kyler"}).status_code == 200


def test_videos_respects_limit(client: TestClient) -> None:
    results = client.get("/videos", params={"query": "baker", "limit": 1}).json()["results"]
    assert len(results) == 1


@pytest.mark.parametrize("params", [{}, {"query": ""}, {"query": "   "}])
def test_videos_empty_query(client: TestClient, params: dict) -> None:
    response = client.get("/videos", params=params)
    assert response.status_code == 200
    assert response.json() == {"results": []}


def test_videos_skips_entries_without_video_id(client: TestClient) -> None:
    assert client.get("/videos", params={"query": "schooner"}).json() == {"results": []}


@pytest.mark.parametrize("limit, expected", [
    ("1", 1),
    ("2", 2),
    ("", 3),
    ("abc", 3),
    ("0", 3),
    ("-4", 3),
    ("500", 3),
])
def test_videos_lenient_limit(client: TestClient, limit: str, expected: int) -> None:
    # "s" matches every entry; the three with a video id outrank the one without
    response = client.get("/videos", params={"query": "s", "limit": limit})
    assert response.status_code == 200
    assert len(response.json()["results"]) == expected


@pytest.mark.parametrize("raw, limit", [
    (None, 3),
    ("", 3),
    ("  ", 3),
    ("abc", 3),
    ("0", 3),
    ("-1", 3),
    ("7", 7),
    ("50", 50),
    ("51", 50),
])
def test_parse_limit(raw, limit) -> None:
    assert parse_limit(raw) == limit


def test_videos_before_first_load(make_config) -> None:
    app = create_app(make_config(), store=CatalogStore("https://videos.test/videos.json"))
    with TestClient(app) as client:
        response = client.get("/videos", params={"query": "baker"})
    assert response.status_code == 503
    assert response.json() == {"error": "Video library still loading"}
