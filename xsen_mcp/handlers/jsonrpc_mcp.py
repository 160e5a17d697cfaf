"""JSON-RPC 2.0 handler for the MCP protocol (initialize, tools/list, tools/call)."""

import json
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from xsen_mcp.handlers.auth import BearerTokenAuth
from xsen_mcp.models.auth import AuthContext
from xsen_mcp.models.errors import (
    AuthenticationError,
    ErrorCode,
    ErrorDetail,
    InvalidParamsError,
    InvalidRequestError,
    MCPError,
    MethodNotFoundError,
    ParseRequestError,
)
from xsen_mcp.models.mcp import (
    JSONRPC_VERSION,
    MCP_PROTOCOL_VERSION,
    SERVER_VERSION,
    SERVICE_NAME,
    JSONRPCErrorResponse,
    JSONRPCRequest,
    JSONRPCResult,
    RequestId,
    ToolExecutionContext,
)
from xsen_mcp.registry.tool_registry import ToolRegistry
from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _echo_id(payload: Any) -> RequestId:
    """The request id when one can be recovered from the raw payload."""
    if not isinstance(payload, dict):
        return None
    request_id = payload.get("id")
    if isinstance(request_id, bool) or not isinstance(request_id, (int, str)):
        return None
    return request_id


def error_body(request_id: RequestId, error: ErrorDetail) -> dict[str, Any]:
    body = JSONRPCErrorResponse(id=request_id, error=error).model_dump(mode="json")
    if body["error"].get("data") is None:
        body["error"].pop("data", None)
    return body


def result_body(request_id: RequestId, result: dict[str, Any]) -> dict[str, Any]:
    return JSONRPCResult(id=request_id, result=result).model_dump(mode="json")


class JSONRPCDispatcher:
    """
    Routes a single JSON-RPC request.

    Checks run in order: body parsing, bearer auth, envelope validation, method
    routing. Every outcome is a well-formed response; `dispatch` never raises.
    """

    def __init__(self, registry: ToolRegistry, auth: BearerTokenAuth) -> None:
        self.registry = registry
        self.auth = auth
        self._methods = {
            "initialize": self._initialize,
            "notifications/initialized": self._initialized,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def dispatch(
        self, body: bytes, authorization: str | None
    ) -> tuple[int, dict[str, Any] | None]:
        """
        Handles one raw request body.

        Returns:
            The HTTP status code and the response body, or None for notifications.
        """
        payload: Any = None
        parse_failed = False
        try:
            payload = json.loads(body)
        except (ValueError, RecursionError):
            # Deeply nested documents exhaust the decoder and count as unparseable
            parse_failed = True

        request_id = _echo_id(payload)

        try:
            auth_context = self.auth.authenticate(authorization)
        except AuthenticationError as e:
            return e.http_status, error_body(request_id, e.to_detail())

        if parse_failed:
            logger.warning("jsonrpc_parse_error", body_size=len(body))
            return 200, error_body(None, ParseRequestError().to_detail())

        try:
            rpc_request = self._parse_envelope(payload)
        except MCPError as e:
            logger.warning("jsonrpc_invalid_request", id=request_id, error=e.message)
            return 200, error_body(request_id, e.to_detail())

        logger.info("jsonrpc_request", method=rpc_request.method, id=rpc_request.id)

        try:
            result = await self._route(rpc_request, auth_context)
        except MCPError as e:
            logger.warning(
                "jsonrpc_method_error",
                method=rpc_request.method,
                id=rpc_request.id,
                error_code=int(e.code),
                error=e.message,
            )
            return 200, error_body(rpc_request.id, e.to_detail())
        except Exception as e:
            # Internal errors always report a null id.
            logger.error(
                "jsonrpc_internal_error",
                method=rpc_request.method,
                id=rpc_request.id,
                error=str(e),
                exc_info=True,
            )
            detail = ErrorDetail(code=int(ErrorCode.INTERNAL_ERROR), message="Internal error")
            return 200, error_body(None, detail)

        if result is None:
            return 200, None
        return 200, result_body(rpc_request.id, result)

    def _parse_envelope(self, payload: Any) -> JSONRPCRequest:
        if not isinstance(payload, dict):
            raise InvalidRequestError("Invalid Request: body must be a JSON object")
        if payload.get("jsonrpc") != JSONRPC_VERSION:
            raise InvalidRequestError("Invalid JSON-RPC version")
        try:
            return JSONRPCRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidRequestError(
                "Invalid Request",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    async def _route(
        self, rpc_request: JSONRPCRequest, auth_context: AuthContext
    ) -> dict[str, Any] | None:
        handler = self._methods.get(rpc_request.method)
        if handler is None:
            raise MethodNotFoundError(rpc_request.method)
        return await handler(rpc_request.params or {}, auth_context)

    async def _initialize(self, params: dict[str, Any], auth_context: AuthContext) -> dict[str, Any]:
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "serverInfo": {"name": SERVICE_NAME, "version": SERVER_VERSION},
            "capabilities": {"tools": {}},
        }

    async def _initialized(self, params: dict[str, Any], auth_context: AuthContext) -> None:
        return None

    async def _list_tools(self, params: dict[str, Any], auth_context: AuthContext) -> dict[str, Any]:
        return {
            "tools": [
                tool.model_dump(by_alias=True) for tool in self.registry.generate_mcp_schema()
            ]
        }

    async def _call_tool(self, params: dict[str, Any], auth_context: AuthContext) -> dict[str, Any]:
        tool = self.registry.require_tool(params.get("name"))

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("'arguments' must be an object")
        self.registry.validate_arguments(tool, arguments)

        correlation_id = str(uuid4())
        bound_logger = logger.bind(correlation_id=correlation_id, tool_name=tool.name)
        tool_context = ToolExecutionContext(
            correlation_id=correlation_id,
            logger=bound_logger,
            auth_context=auth_context,
        )

        bound_logger.info("Executing tool via JSON-RPC")
        text = await tool.handler(arguments, tool_context)

        return {
            "content": [{"type": "text", "text": str(text)}],
            "isError": False,
        }


@router.post("/mcp")
async def jsonrpc_mcp_handler(request: Request) -> Response:
    """
    JSON-RPC 2.0 endpoint for MCP tool callers.
    """
    dispatcher: JSONRPCDispatcher = request.app.state.dispatcher
    body = await request.body()
    status_code, payload = await dispatcher.dispatch(body, request.headers.get("authorization"))
    if payload is None:
        return Response(status_code=status_code)
    return JSONResponse(payload, status_code=status_code)
