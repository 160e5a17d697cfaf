import pytest

from xsen_mcp.catalog.render import (
    CATALOG_LOADING_MESSAGE,
    CLOSING_PROMPT,
    EMPTY_QUERY_PROMPT,
    NO_RESULTS_MESSAGE,
)
from xsen_mcp.catalog.search import SearchMode
from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.tools.xsen_search_tool import XsenSearchTool
from tests.conftest import TEST_PLAYER_URL


@pytest.fixture
def xsen_tool(loaded_store):
    return XsenSearchTool(store=loaded_store, player_base_url=TEST_PLAYER_URL)


def test_tool_descriptor(xsen_tool):
    assert xsen_tool.name == "xsen_search"
    assert "OU Sooners" in xsen_tool.description
    assert xsen_tool.input_schema["required"] == ["query"]
    assert xsen_tool.input_schema["properties"]["query"]["type"] == "string"


@pytest.mark.asyncio
async def test_handler_renders_ranked_matches(xsen_tool, mock_context):
    text = await xsen_tool.handler({"query": "baker"}, mock_context)

    # Baker is in the title of the first entry and the description of the third
    assert text.index("?v=abc123") < text.index("?v=rrs001")
    assert f'src="{TEST_PLAYER_URL}?v=abc123"' in text
    assert text.endswith(CLOSING_PROMPT)
    mock_context.logger.info.assert_any_call(
        "xsen_search.completed",
        query="baker",
        mode="scored",
        matches=2,
        catalog_version=1,
        catalog_size=4,
    )


@pytest.mark.asyncio
async def test_handler_respects_limit(xsen_tool, mock_context):
    text = await xsen_tool.handler({"query": "baker", "limit": 1}, mock_context)
    assert "?v=abc123" in text
    assert "?v=rrs001" not in text


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"query": ""}, {"query": "   "}, {}])
async def test_handler_empty_query_returns_prompt(xsen_tool, mock_context, params):
    assert await xsen_tool.handler(params, mock_context) == EMPTY_QUERY_PROMPT


@pytest.mark.asyncio
async def test_handler_no_match_returns_fixed_message(xsen_tool, mock_context):
    assert await xsen_tool.handler({"query": "zzz-no-match"}, mock_context) == NO_RESULTS_MESSAGE


@pytest.mark.asyncio
async def test_handler_match_without_video_id_is_not_rendered(xsen_tool, mock_context):
    assert await xsen_tool.handler({"query": "schooner"}, mock_context) == NO_RESULTS_MESSAGE


@pytest.mark.asyncio
async def test_handler_before_first_load_reports_loading(mock_context):
    tool = XsenSearchTool(store=CatalogStore("https://videos.test"), player_base_url=TEST_PLAYER_URL)
    assert await tool.handler({"query": "baker"}, mock_context) == CATALOG_LOADING_MESSAGE


@pytest.mark.asyncio
async def test_handler_substring_mode(loaded_store, mock_context):
    tool = XsenSearchTool(
        store=loaded_store, player_base_url=TEST_PLAYER_URL, mode=SearchMode.SUBSTRING
    )
    assert await tool.handler({"query": "mayfield heisman"}, mock_context) == NO_RESULTS_MESSAGE
    text = await tool.handler({"query": "Heisman run"}, mock_context)
    assert "?v=abc123" in text


@pytest.mark.asyncio
async def test_handler_reads_a_single_snapshot(loaded_store, mock_context, sample_entries):
    """A reload after the handler starts does not affect its result."""
    tool = XsenSearchTool(store=loaded_store, player_base_url=TEST_PLAYER_URL)
    first = await tool.handler({"query": "baker"}, mock_context)
    loaded_store.replace([])
    assert await tool.handler({"query": "baker"}, mock_context) == NO_RESULTS_MESSAGE
    loaded_store.replace(sample_entries)
    assert await tool.handler({"query": "baker"}, mock_context) == first
