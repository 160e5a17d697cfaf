"""Tool for searching the XSEN video catalog."""

from typing import Any

from xsen_mcp.catalog.render import CATALOG_LOADING_MESSAGE, EMPTY_QUERY_PROMPT, render
from xsen_mcp.catalog.search import DEFAULT_LIMIT, SearchMode, search
from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.models.catalog import Catalog
from xsen_mcp.models.mcp import ToolExecutionContext
from xsen_mcp.tools.base import CatalogTool

MAX_LIMIT = 10


class XsenSearchTool(CatalogTool):
    """Searches OU Sooners videos and returns embedded XSEN players."""

    def __init__(
        self,
        store: CatalogStore,
        player_base_url: str,
        mode: SearchMode = SearchMode.SCORED,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        super().__init__(store)
        self.player_base_url = player_base_url
        self.mode = SearchMode(mode)
        self.default_limit = default_limit

    @property
    def name(self) -> str:
        return "xsen_search"

    @property
    def description(self) -> str:
        return "Search OU Sooners video highlights and return XSEN embedded players."

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query for OU videos",
                },
                "limit": {
                    "type": "integer",
                    "description": "Maximum number of videos to return",
                    "minimum": 1,
                    "maximum": MAX_LIMIT,
                },
            },
            "required": ["query"],
        }

    async def answer(
        self, catalog: Catalog, params: dict[str, Any], context: ToolExecutionContext
    ) -> str:
        query = params.get("query", "")
        limit = params.get("limit", self.default_limit)

        results = search(catalog, query, limit, mode=self.mode)

        if results.no_query:
            context.logger.info("xsen_search.empty_query")
            return EMPTY_QUERY_PROMPT

        if not catalog.is_loaded:
            context.logger.warning("xsen_search.catalog_not_loaded")
            return CATALOG_LOADING_MESSAGE

        context.logger.info(
            "xsen_search.completed",
            query=results.query,
            mode=self.mode.value,
            matches=len(results),
            catalog_version=catalog.version,
            catalog_size=len(catalog),
        )
        return render(results, self.player_base_url)
