"""
MCP protocol layer shared by the stdio and HTTP transports.
"""
