from typing import Any, Dict, List, Optional
from inspect import iscoroutinefunction

from jsonschema import SchemaError, ValidationError, validate
from jsonschema.validators import validator_for

from xsen_mcp.catalog.search import SearchMode
from xsen_mcp.catalog.store import CatalogStore
from xsen_mcp.config import Config
from xsen_mcp.models.errors import InvalidParamsError, ToolNotFoundError
from xsen_mcp.models.mcp import MCPToolDefinition
from xsen_mcp.tools.base import CatalogTool
from xsen_mcp.tools.xsen_search_tool import XsenSearchTool


class ToolRegistrationError(Exception):
    """Custom exception for tool registration errors."""
    pass


class ToolRegistry:
    """
    Manages the registration and retrieval of MCP tools.
    Each application builds its own registry, so tools stay bound to that app's catalog store.
    """

    def __init__(self) -> None:
        self._registered_tools: Dict[str, CatalogTool] = {}

    def register_tool(self, tool: CatalogTool, replace: bool = False) -> None:
        """
        Registers an MCP tool with the registry after validating it.

        Args:
            tool: An instance of a class inheriting from CatalogTool.
            replace: Overwrite a tool already registered under the same name.

        Raises:
            ToolRegistrationError: If the tool is invalid or a duplicate name is found.
        """
        self._validate_tool_instance(tool)
        self._validate_tool_properties(tool)
        if not replace:
            self._validate_duplicate_name(tool)
        self._validate_input_schema(tool)

        self._registered_tools[tool.name] = tool

    def _validate_tool_instance(self, tool: Any) -> None:
        """Checks if the provided object is an instance of CatalogTool."""
        if not isinstance(tool, CatalogTool):
            raise ToolRegistrationError(f"Provided object is not an instance of CatalogTool: {type(tool)}")

    def _validate_tool_properties(self, tool: CatalogTool) -> None:
        """Validates that the tool has all required and correctly typed properties."""
        if not tool.name or not isinstance(tool.name, str):
            raise ToolRegistrationError("Tool must have a non-empty string 'name'.")
        if not tool.description or not isinstance(tool.description, str):
            raise ToolRegistrationError(f"Tool '{tool.name}' must have a non-empty string 'description'.")
        if not isinstance(tool.input_schema, dict):
            raise ToolRegistrationError(f"Tool '{tool.name}' must have a 'input_schema' of type dict.")
        if not (callable(tool.handler) and iscoroutinefunction(tool.handler)):
            raise ToolRegistrationError(f"Tool '{tool.name}' must have an async 'handler' method.")

    def _validate_duplicate_name(self, tool: CatalogTool) -> None:
        """Checks if a tool with the same name is already registered."""
        if tool.name in self._registered_tools:
            raise ToolRegistrationError(f"Tool with name '{tool.name}' already registered.")

    def _validate_input_schema(self, tool: CatalogTool) -> None:
        """Checks the tool's input_schema against its JSON Schema meta-schema."""
        try:
            validator_for(tool.input_schema).check_schema(tool.input_schema)
        except SchemaError as e:
            raise ToolRegistrationError(f"Tool '{tool.name}' has an invalid 'input_schema': {e.message}")

    def get_tool(self, tool_name: str) -> Optional[CatalogTool]:
        """
        Retrieves a registered tool by its name.

        Returns:
            The CatalogTool instance if found, otherwise None.
        """
        return self._registered_tools.get(tool_name)

    def require_tool(self, tool_name: Any) -> CatalogTool:
        """
        Retrieves a registered tool by its name.

        Raises:
            ToolNotFoundError: If no tool is registered under that name.
        """
        tool = self._registered_tools.get(tool_name) if isinstance(tool_name, str) else None
        if tool is None:
            raise ToolNotFoundError(tool_name)
        return tool

    def validate_arguments(self, tool: CatalogTool, arguments: dict[str, Any]) -> None:
        """
        Validates tools/call arguments against the tool's input_schema.

        Raises:
            InvalidParamsError: If the arguments do not satisfy the schema.
        """
        try:
            validate(instance=arguments, schema=tool.input_schema)
        except ValidationError as e:
            raise InvalidParamsError(
                f"Invalid arguments for tool '{tool.name}': {e.message}",
                details={"path": list(e.absolute_path)},
            ) from e

    def get_registered_tool_names(self) -> List[str]:
        """
        Returns a list of names of all currently registered tools.
        """
        return list(self._registered_tools.keys())

    def generate_mcp_schema(self) -> List[MCPToolDefinition]:
        """
        Generates a list of MCPToolDefinition objects for all registered tools.
        This is used to expose the available tools and their schemas to the MCP client.
        """
        return [
            MCPToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema,
            )
            for tool in self._registered_tools.values()
        ]


def register_all_tools(store: CatalogStore, config: Config) -> ToolRegistry:
    """
    Builds a fresh registry holding the application's tools, bound to `store`.
    """
    registry = ToolRegistry()
    registry.register_tool(
        XsenSearchTool(
            store=store,
            player_base_url=config.xsen_player_url,
            mode=SearchMode(config.tool_search_mode),
            default_limit=config.default_result_limit,
        )
    )
    return registry
