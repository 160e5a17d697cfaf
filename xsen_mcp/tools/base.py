from abc import ABC, abstractmethod
from typing import Any

from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.models.catalog import Catalog
from xsen_mcp.models.mcp import ToolExecutionContext


class CatalogTool(ABC):
    """
    An MCP tool that answers from the video catalog.

    Each call reads exactly one catalog snapshot and hands it to `answer`, so a
    refresh landing mid-call never mixes two catalog versions in one response.
    """

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def description(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """Published through tools/list and enforced on tools/call."""
        raise NotImplementedError

    @abstractmethod
    async def answer(
        self, catalog: Catalog, params: dict[str, Any], context: ToolExecutionContext
    ) -> str:
        """
        Produces the text returned to the caller.

        Args:
            catalog: The snapshot taken for this call; may not be loaded yet.
            params: Arguments already validated against `input_schema`.
            context: Per-call correlation id, bound logger and auth context.
        """
        raise NotImplementedError

    async def handler(self, params: dict[str, Any], context: ToolExecutionContext) -> str:
        catalog = self.store.snapshot()
        context.logger.debug(
            "tool_snapshot_taken",
            catalog_version=catalog.version,
            catalog_size=len(catalog),
        )
        return await self.answer(catalog, params, context)
