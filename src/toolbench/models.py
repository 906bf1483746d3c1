"""Pydantic models shared by the server and the CLI."""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from .errors import ToolHandlerError
from .tools.base import Tool


class ErrorResponse(BaseModel):
    """Error body returned when a tool fails while serving a request."""

    error_code: str = Field(..., description="Specific error code")
    user_message: str = Field(..., description="User-friendly error message")
    tool: str = Field(..., description="Class of the tool that failed")
    path: str = Field(..., description="Request path")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )

    @classmethod
    def from_handler_error(cls, error: ToolHandlerError) -> "ErrorResponse":
        return cls(
            error_code=f"TOOL_ERROR_{type(error.cause).__name__}".upper(),
            user_message=f"The tool {error.tool_type.__name__} failed to handle this request.",
            tool=error.tool_type.__qualname__,
            path=error.path,
        )


class ToolInfo(BaseModel):
    """Public identity of a discovered tool."""

    name: Optional[str] = Field(None, description="Human readable tool name")
    url_name: Optional[str] = Field(None, description="URL segment, None for the root tool")
    listed: bool = Field(True, description="Whether the tool is advertised")
    keywords: Optional[str] = Field(None, description="Search keywords")
    description: Optional[str] = Field(None, description="Tool description")
    type: str = Field(..., description="Implementing class")

    @classmethod
    def from_tool(cls, tool: Tool) -> "ToolInfo":
        return cls(
            name=tool.name,
            url_name=tool.url_name,
            listed=tool.listed,
            keywords=tool.keywords,
            description=tool.description,
            type=f"{type(tool).__module__}.{type(tool).__qualname__}",
        )

    @property
    def path(self) -> str:
        return "/" + self.url_name if self.url_name else "/"


def describe_tools(tools: Sequence[Tool]) -> List[ToolInfo]:
    return [ToolInfo.from_tool(tool) for tool in tools]
