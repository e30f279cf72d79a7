"""
Smoke test for a running Time Server through the official MCP client.

    python scripts/smoke_client.py                     # HTTP/SSE on localhost:3000
    python scripts/smoke_client.py --url http://host:3000/mcp
    python scripts/smoke_client.py --stdio             # spawn the stdio server
"""
import argparse
import asyncio
import sys
from contextlib import asynccontextmanager

from mcp import ClientSession, StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client

CALLS = [
    ("get_current_time", {"format": "iso"}),
    ("get_current_time", {"format": "local", "timezone": "America/New_York"}),
    ("get_current_date", {"format": "long"}),
    ("get_current_date", {"format": "custom", "customFormat": '{"weekday": "short", "month": "long", "day": "numeric"}'}),
    ("get_datetime_info", {"timezone": "Asia/Tokyo"}),
    ("format_timestamp", {"timestamp": 0, "format": "utc"}),
    ("format_timestamp", {}),
]


@asynccontextmanager
async def open_streams(args):
    if args.stdio:
        params = StdioServerParameters(command=sys.executable, args=["-m", "timeserver.stdio_server"])
        async with stdio_client(params) as streams:
            yield streams
    else:
        async with sse_client(args.url) as streams:
            yield streams


async def smoke(args) -> None:
    """Connect, list tools and call each of them once."""
    print(f"🔌 Connecting to {'stdio server' if args.stdio else args.url}...")

    async with open_streams(args) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            init = await session.initialize()
            print(f"✅ Connected to {init.serverInfo.name} {init.serverInfo.version}\n")

            tools = await session.list_tools()
            print(f"Available tools: {[t.name for t in tools.tools]}\n")

            for name, arguments in CALLS:
                result = await session.call_tool(name, arguments)
                marker = "❌" if result.isError else "✅"
                print(f"{marker} {name}({arguments})")
                for block in result.content:
                    print(f"   {block.text}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Time Server smoke test")
    parser.add_argument("--url", default="http://localhost:3000/mcp")
    parser.add_argument("--stdio", action="store_true", help="Spawn the stdio server instead")
    asyncio.run(smoke(parser.parse_args()))
