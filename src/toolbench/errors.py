"""Exceptions raised by the tool registry."""

from typing import Optional

from starlette.exceptions import HTTPException


class ToolConstructionError(RuntimeError):
    """A tool class could not be instantiated without arguments.

    This is a programming defect; discovery raises it and nothing catches it,
    so the process never serves traffic with an incomplete tool set.
    """

    def __init__(self, tool_type: type, cause: Exception):
        super().__init__(
            f"Cannot construct tool {tool_type.__module__}.{tool_type.__qualname__}: "
            f"{type(cause).__name__}: {cause}"
        )
        self.tool_type = tool_type
        self.cause = cause


class ToolHandlerError(Exception):
    """A tool's handler failed while serving a single request."""

    def __init__(self, tool_type: type, path: str, cause: Exception):
        super().__init__(f"Tool {tool_type.__qualname__} failed on {path}: {cause}")
        self.tool_type = tool_type
        self.path = path
        self.cause = cause


class UnmatchedRoute(HTTPException):
    """No hook in a resolver matched the request path."""

    def __init__(self, path: str, detail: Optional[str] = None):
        super().__init__(status_code=404, detail=detail or "Not Found")
        self.path = path
