"""
Time Server - FastAPI application (HTTP + SSE transport).
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .logger import get_logger
from .mcp.server import dispatcher, router as mcp_router, sse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the loaded tools on startup."""
    tools = dispatcher.list_tools()
    logger.info("Time Server starting with %d tools: %s", len(tools), ", ".join(t.name for t in tools))
    logger.info("MCP endpoint: http://%s:%d%s", config.HOST, config.PORT, config.MCP_PATH)
    logger.info("SSE messages endpoint: http://%s:%d%s", config.HOST, config.PORT, config.MESSAGES_PATH)
    yield
    logger.info("Time Server stopped")


# Create FastAPI app
app = FastAPI(
    title="Time Server",
    description="MCP server exposing current time, date and timestamp formatting tools",
    version=config.SERVER_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include MCP router
app.include_router(mcp_router)
app.mount(config.MESSAGES_PATH, app=sse.handle_post_message)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": config.SERVER_NAME,
        "version": config.SERVER_VERSION,
        "status": "operational"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": dispatcher.formatter.to_iso(dispatcher.formatter.now()),
    }


def run() -> None:
    """Console entry point."""
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
