"""Models for the MCP server."""

import time
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field

from xsen_mcp.models.auth import AuthContext
from xsen_mcp.models.errors import ErrorDetail

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"
SERVICE_NAME = "XSEN Video MCP"
SERVER_VERSION = "1.0.0"

RequestId = int | str | None


class MCPToolDefinition(BaseModel):
    """
    Defines the structure for an MCP tool's metadata, as returned by tools/list.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="The unique name of the tool.")
    description: str = Field(..., description="A brief description of what the tool does.")
    input_schema: dict[str, Any] = Field(
        ...,
        alias="inputSchema",
        description="The JSON schema for the tool's input parameters.",
    )


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""

    jsonrpc: str | None = None
    id: RequestId = None
    method: str
    params: dict[str, Any] | None = None


class JSONRPCResult(BaseModel):
    """Successful JSON-RPC 2.0 response."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId
    result: dict[str, Any]


class JSONRPCErrorResponse(BaseModel):
    """Failed JSON-RPC 2.0 response."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId
    error: ErrorDetail


@dataclass
class ToolExecutionContext:
    """
    Context object passed to tool handlers.
    Encapsulates request-specific information like correlation ID, logger, and auth context.
    """

    correlation_id: str
    logger: structlog.stdlib.BoundLogger
    auth_context: AuthContext | None = None
    start_time: float = field(default_factory=time.monotonic)


class StatusResponse(BaseModel):
    """
    Response model for the liveness/status endpoint.
    """

    status: str = Field(..., description="Status of the server")
    service: str = Field(..., description="Service name")
    videos: int = Field(..., description="Number of videos in the current catalog")
    uptime: float = Field(..., description="Seconds since the application started")


class VideoResult(BaseModel):
    """One entry of the browser-facing /videos response."""

    title: str
    thumbnail: str
    duration: str = "—"
    url: str
    description: str


class VideosResponse(BaseModel):
    results: list[VideoResult] = Field(default_factory=list)
