"""
MCP protocol models - JSON-RPC 2.0 format.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


# ============ BASE MODELS ============

class MCPRequest(BaseModel):
    """Base request. Notifications carry no id."""
    jsonrpc: str = Field(default="2.0")
    id: Optional[Union[int, str]] = Field(default=None)
    method: str = Field(...)
    params: Optional[dict[str, Any]] = Field(default=None)

    @property
    def is_notification(self) -> bool:
        return self.id is None


class MCPResponse(BaseModel):
    """Base response - all MCP responses have these fields."""
    jsonrpc: str = Field(default="2.0")
    id: Optional[Union[int, str]] = Field(default=None)
    result: Optional[dict[str, Any]] = Field(default=None)
    error: Optional[dict[str, Any]] = Field(default=None)

    def to_message(self) -> dict[str, Any]:
        """Wire format: exactly one of result/error, id always present."""
        message = self.model_dump(exclude_none=True)
        message["id"] = self.id
        return message


# ============ ERROR HANDLING ============

class MCPError(BaseModel):
    """Error structure."""
    code: int = Field(...)
    message: str = Field(...)
    data: Optional[dict[str, Any]] = Field(default=None)


# Error codes
ERROR_PARSE_ERROR = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL_ERROR = -32603
