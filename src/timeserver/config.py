"""
Time Server configuration.

Values come from the environment (a local .env file is loaded first).
"""
import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Server
# =============================================================================

SERVER_NAME = "time-server"
SERVER_VERSION = "0.1.0"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Event stream (GET) and direct JSON-RPC posts (POST)
MCP_PATH = "/mcp"

# Where SSE clients post their messages (?session_id=<id>)
MESSAGES_PATH = "/messages/"

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# =============================================================================
# Date/time rendering
# =============================================================================


def zone_from_tz(value: str) -> str | None:
    """IANA name carried by a TZ value, or None for paths and POSIX rules."""
    value = value.lstrip(":")
    if not value or value.startswith("/") or any(char.isdigit() for char in value.split("/")[0]):
        return None
    return value


# IANA zone used for "local" renderings. Empty means: ask the host.
LOCAL_TIMEZONE = os.getenv("TIMESERVER_TIMEZONE") or zone_from_tz(os.getenv("TZ", "")) or None

DEFAULT_LOCALE = os.getenv("TIMESERVER_LOCALE", "en-US")
