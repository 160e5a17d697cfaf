"""Error handling data models."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes returned by the MCP endpoint."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ErrorDetail(BaseModel):
    """The `error` member of a JSON-RPC error response."""

    code: int = Field(..., description="JSON-RPC error code")
    message: str = Field(..., description="Human-readable error message")
    data: dict[str, Any] | None = Field(None, description="Additional error context")


# Custom exception classes
class MCPError(Exception):
    """Base exception for errors reported back to the JSON-RPC caller."""

    http_status: int = 200

    def __init__(self, code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(code=int(self.code), message=self.message, data=self.details)


class ParseRequestError(MCPError):
    """The request body is not valid JSON."""

    def __init__(self, message: str = "Parse error") -> None:
        super().__init__(ErrorCode.PARSE_ERROR, message)


class InvalidRequestError(MCPError):
    """The request body is not a valid JSON-RPC 2.0 envelope."""

    def __init__(self, message: str = "Invalid Request", details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_REQUEST, message, details)


class AuthenticationError(MCPError):
    """Authentication failed."""

    http_status = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(ErrorCode.INVALID_REQUEST, message)


class MethodNotFoundError(MCPError):
    """Unknown JSON-RPC method."""

    def __init__(self, method: Any) -> None:
        super().__init__(ErrorCode.METHOD_NOT_FOUND, f"Unknown method: {method}")


class ToolNotFoundError(MCPError):
    """tools/call named a tool that is not registered."""

    def __init__(self, tool_name: Any) -> None:
        super().__init__(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")


class InvalidParamsError(MCPError):
    """Tool arguments do not satisfy the tool's input schema."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_PARAMS, message, details)


class CatalogError(Exception):
    """Base exception for catalog loading failures."""

    def __init__(self, message: str, source_url: str) -> None:
        self.message = message
        self.source_url = source_url
        super().__init__(message)


class FetchError(CatalogError):
    """The catalog document could not be downloaded."""


class ParseError(CatalogError):
    """The catalog document was downloaded but is not a valid catalog."""
