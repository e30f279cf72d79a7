"""
MCP utilities - handler functions for processing requests.

Every handler takes the parsed request plus the dispatcher and returns the
JSON-RPC response as a dict (or None for notifications).
"""
from typing import Any, Optional

from ..logger import get_logger
from ..tools.base import ToolDispatcher
from .models import (
    ERROR_INTERNAL_ERROR,
    ERROR_INVALID_PARAMS,
    ERROR_METHOD_NOT_FOUND,
    MCPError,
    MCPRequest,
    MCPResponse,
)

logger = get_logger(__name__)


def error_response(request_id, code: int, message: str) -> dict:
    """Build a JSON-RPC error response."""
    error = MCPError(code=code, message=message)
    return MCPResponse(id=request_id, error=error.model_dump(exclude_none=True)).to_message()


def result_response(request_id, result: dict[str, Any]) -> dict:
    """Build a JSON-RPC success response."""
    return MCPResponse(id=request_id, result=result).to_message()


def handle_tools_list(request: MCPRequest, dispatcher: ToolDispatcher) -> dict:
    """
    Handle tools/list request.
    Returns all registered tools in MCP format.
    """
    try:
        tools_json = [schema.model_dump() for schema in dispatcher.list_tools()]
        return result_response(request.id, {"tools": tools_json})
    except Exception as e:
        logger.exception("tools/list failed")
        return error_response(request.id, ERROR_INTERNAL_ERROR, str(e))


def handle_tools_call(request: MCPRequest, dispatcher: ToolDispatcher) -> dict:
    """
    Handle tools/call request.
    Executes a tool and returns the result. Tool failures are reported
    inside the result (isError), not as JSON-RPC errors.
    """
    params = request.params or {}
    tool_name = params.get("name")
    tool_args = params.get("arguments") or {}

    if not isinstance(tool_name, str):
        return error_response(request.id, ERROR_INVALID_PARAMS, "Missing tool name")
    if not isinstance(tool_args, dict):
        return error_response(request.id, ERROR_INVALID_PARAMS, "Tool arguments must be an object")

    result = dispatcher.call_tool(tool_name, tool_args)
    return result_response(request.id, result.model_dump())


def handle_request(request: MCPRequest, dispatcher: ToolDispatcher) -> Optional[dict]:
    """
    Route a request based on its method field.
    Returns None for notifications, which never get a response.
    """
    if request.is_notification:
        logger.debug("Notification %s", request.method)
        return None

    # Route: tools/list
    if request.method == "tools/list":
        return handle_tools_list(request, dispatcher)

    # Route: tools/call
    elif request.method == "tools/call":
        return handle_tools_call(request, dispatcher)

    # Error: unknown method
    else:
        return error_response(
            request.id, ERROR_METHOD_NOT_FOUND, f"Method '{request.method}' not found"
        )
