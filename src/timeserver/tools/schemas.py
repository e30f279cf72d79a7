"""
Tool schema definitions for the Time Server.

ToolSchema: JSON-serializable format for MCP responses.
ToolDefinition: Internal storage that includes the callable function.
ToolResult: Uniform result envelope returned by every tool call.
"""
import copy
from typing import Any, Callable, Literal

from pydantic import BaseModel, Field


class ToolSchema(BaseModel):
    """
    MCP-compliant tool format.
    Sent to clients via tools/list response.
    """
    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    inputSchema: dict[str, Any] = Field(..., description="JSON Schema for parameters")


class TextContent(BaseModel):
    """Single text block of a tool result."""
    type: Literal["text"] = Field(default="text")
    text: str = Field(...)


class ToolResult(BaseModel):
    """
    Result of a tools/call request.
    Always carries exactly one text block.
    """
    content: list[TextContent] = Field(...)
    isError: bool = Field(default=False)

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], isError=is_error)


class ToolDefinition:
    """
    Internal tool storage.
    Includes the actual function to execute.
    """
    def __init__(
        self,
        name: str,
        description: str,
        inputSchema: dict[str, Any],
        function: Callable
    ):
        self.name = name
        self.description = description
        self.inputSchema = inputSchema
        self.function = function

    def to_schema(self) -> ToolSchema:
        """Convert to MCP-compliant format (drops function)."""
        return ToolSchema(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(self.inputSchema)
        )
