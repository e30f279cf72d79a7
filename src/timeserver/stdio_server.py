"""
Time Server - stdio transport.

Newline-delimited JSON-RPC on stdin/stdout through the MCP SDK. Logs go to
stderr.
"""
import asyncio

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .logger import get_logger
from .mcp.protocol import create_server
from .tools import create_dispatcher

logger = get_logger(__name__)


async def serve(server: Server, stdin=None, stdout=None) -> None:
    """Answer messages until stdin is closed.

    Args:
        server: Server built by create_server()
        stdin: Async text stream to read from (defaults to the process stdin)
        stdout: Async text stream to write to (defaults to the process stdout)
    """
    async with stdio_server(stdin, stdout) as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point."""
    server = create_server(create_dispatcher())
    logger.info("Time MCP server running on stdio")
    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        pass
    logger.info("stdin closed, shutting down")


if __name__ == "__main__":
    main()
