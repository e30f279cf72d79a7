"""
Time Server - MCP tools for current time, dates and timestamp formatting.
"""

__version__ = "0.1.0"
