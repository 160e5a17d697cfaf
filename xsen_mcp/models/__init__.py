"""Data models for the XSEN video MCP server."""

from xsen_mcp.models.auth import AuthContext
from xsen_mcp.models.catalog import Catalog, CatalogEntry, Match, SearchResults
from xsen_mcp.models.errors import ErrorCode, ErrorDetail, MCPError
from xsen_mcp.models.mcp import MCPToolDefinition, StatusResponse, ToolExecutionContext

__all__ = [
    "AuthContext",
    "Catalog",
    "CatalogEntry",
    "ErrorCode",
    "ErrorDetail",
    "MCPError",
    "MCPToolDefinition",
    "Match",
    "SearchResults",
    "StatusResponse",
    "ToolExecutionContext",
]
