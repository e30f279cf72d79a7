"""
MCP server - the SDK server plus the FastAPI routes that carry it.

GET  /mcp                       open an SSE session; the first event names
                                the endpoint to post messages to
POST /messages/?session_id=<id> deliver a message; the response goes to the
                                session's event stream
POST /mcp                       answer tools/list or tools/call directly in
                                the HTTP response
"""
from fastapi import APIRouter
from fastapi.responses import Response
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from starlette.types import Receive, Scope, Send

from .. import config
from ..logger import get_logger
from ..tools import create_dispatcher
from .models import MCPRequest
from .protocol import create_server
from .utils import handle_request

logger = get_logger(__name__)


class SseEndpoint:
    """ASGI app running one server session per event-stream connection."""

    def __init__(self, server: Server, transport: SseServerTransport):
        self.server = server
        self.transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger.info("SSE session opened")
        async with self.transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        logger.info("SSE session closed")


router = APIRouter()
dispatcher = create_dispatcher()
mcp_server = create_server(dispatcher)
sse = SseServerTransport(config.MESSAGES_PATH)

router.add_route(config.MCP_PATH, SseEndpoint(mcp_server, sse), methods=["GET"])


@router.post(config.MCP_PATH)
async def mcp_endpoint(request: MCPRequest):
    """
    Main MCP endpoint.
    Routes requests based on method field.
    """
    response = handle_request(request, dispatcher)
    if response is None:
        return Response(status_code=202)
    return response
