"""
Tool registry, decorator and dispatcher for the Time Server.
NOTE:
1. MCP uses JSON Schema for tool input definitions, so every parameter is
   declared explicitly with its JSON type, description, enum and default.
2. Arguments are NOT validated against the schema before a call. Each tool
   reads the values it needs and applies its own defaults.
"""
from typing import Any, Callable, Optional

from ..exceptions import UnknownToolError
from ..logger import get_logger
from .clock.formatting import DateTimeFormatter
from .schemas import ToolDefinition, ToolResult, ToolSchema

logger = get_logger(__name__)

# In-memory storage for all registered tools, in registration order
TOOL_REGISTRY: dict[str, ToolDefinition] = {}


def python_type_to_json_schema(python_type: type) -> str:
    """Convert Python type to JSON Schema type."""
    type_map = {
        str: "string",
        int: "integer",
        float: "number",
        bool: "boolean",
        list: "array",
        dict: "object",
    }
    return type_map.get(python_type, "string")  # Default to string


def parameter(
    python_type: type,
    description: str,
    enum: Optional[list] = None,
    default: Any = None,
) -> dict[str, Any]:
    """Build the JSON Schema of a single tool parameter."""
    schema: dict[str, Any] = {
        "type": python_type_to_json_schema(python_type),
        "description": description,
    }
    if enum is not None:
        schema["enum"] = list(enum)
    if default is not None:
        schema["default"] = default
    return schema


def tool(
    name: str,
    description: str,
    properties: Optional[dict[str, dict]] = None,
    required: tuple[str, ...] = (),
) -> Callable:
    """
    Decorator to register a function as an MCP tool.

    Usage:
        @tool(
            name="echo",
            description="Returns what you send",
            properties={"message": parameter(str, "Text to echo")},
            required=("message",),
        )
        def echo(arguments: dict, formatter: DateTimeFormatter) -> str:
            return arguments["message"]

    The function receives the raw arguments mapping and the dispatcher's
    formatter, and returns the text of the result. The original function is
    returned unchanged.
    """
    def decorator(func: Callable) -> Callable:
        input_schema = {
            "type": "object",
            "properties": properties or {},
            "required": list(required),
        }

        TOOL_REGISTRY[name] = ToolDefinition(
            name=name,
            description=description,
            inputSchema=input_schema,
            function=func
        )
        return func

    return decorator


class ToolDispatcher:
    """
    Routes tool calls by name and wraps every outcome in a ToolResult.

    Holds no per-call state, so one instance can serve any number of
    concurrent requests.
    """

    def __init__(
        self,
        formatter: Optional[DateTimeFormatter] = None,
        registry: Optional[dict[str, ToolDefinition]] = None,
    ):
        self.formatter = formatter or DateTimeFormatter()
        self._tools = dict(TOOL_REGISTRY if registry is None else registry)

    def list_tools(self) -> list[ToolSchema]:
        """Return the descriptors of all tools, in registration order."""
        return [definition.to_schema() for definition in self._tools.values()]

    def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """
        Execute a tool. Never raises: failures come back with isError set.
        """
        try:
            definition = self._tools.get(name)
            if definition is None:
                raise UnknownToolError(name)

            logger.debug("Calling tool %s with %s", name, arguments)
            text = definition.function(arguments or {}, self.formatter)
            return ToolResult.text(text)

        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult.text(f"Error: {e}", is_error=True)
