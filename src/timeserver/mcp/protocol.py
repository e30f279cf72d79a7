"""
MCP protocol server shared by the stdio and SSE transports.
"""
from mcp import types
from mcp.server.lowlevel import Server

from .. import config
from ..tools.base import ToolDispatcher


def create_server(dispatcher: ToolDispatcher) -> Server:
    """
    Build an MCP server answering tools/list and tools/call from a dispatcher.

    Arguments reach the tools unvalidated and results keep the dispatcher's
    text and isError flag, so every transport reports the same outcome.
    """
    server = Server(config.SERVER_NAME, version=config.SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**schema.model_dump()) for schema in dispatcher.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> types.CallToolResult:
        result = dispatcher.call_tool(name, arguments)
        return types.CallToolResult.model_validate(result.model_dump())

    return server
