"""Tool capability contract and shared page layout."""

import html
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from starlette.requests import Request
from starlette.responses import HTMLResponse, Response

if TYPE_CHECKING:
    from ..routing import UrlResolver


class Tool(ABC):
    """Base class every tool implements.

    A tool is found by discovery simply by being a concrete subclass defined in
    the ``toolbench.tools`` package. Identity fields are class attributes; the
    registry creates exactly one instance per class and never mutates it.

    Attributes:
        name: Human readable name, or None. Unique among non-None names.
        url_name: URL segment the tool is mounted under. None mounts the tool at
            the root; at most one tool may do so. Never the empty string.
        enabled: Disabled tools are invisible to discovery, validation and routing.
        listed: Whether the tool is advertised on the home page.
        keywords: Space separated search terms.
        description: One sentence shown next to the tool's name.
        js: Script fragment embedded in the tool's pages.
        css: Style fragment embedded in the tool's pages.
    """

    name: Optional[str] = None
    url_name: Optional[str] = None
    enabled: bool = True
    listed: bool = True
    keywords: Optional[str] = None
    description: Optional[str] = None
    js: Optional[str] = None
    css: Optional[str] = None

    @abstractmethod
    async def handle(self, request: Request) -> Response:
        """Handle a request addressed to the root of this tool's URL space."""

    def extend_routes(self, resolver: "UrlResolver") -> None:
        """Register nested paths on the tool's own resolver.

        The root of the tool's space is already bound to :meth:`handle` when
        this is called.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} url_name={self.url_name!r}>"


def render_page(tool: Tool, body: str, title: Optional[str] = None, status_code: int = 200) -> HTMLResponse:
    """Wrap a tool's HTML body in the shared page layout."""
    heading = title or tool.name or "Toolbench"
    head = [
        '<meta charset="utf-8">',
        f"<title>{html.escape(heading)}</title>",
        '<link rel="stylesheet" href="/css">',
    ]
    if tool.css:
        head.append(f"<style>{tool.css}</style>")
    if tool.js:
        head.append(f"<script>{tool.js}</script>")

    page = (
        "<!DOCTYPE html>\n<html><head>"
        + "".join(head)
        + '</head><body><div class="everything">'
        + f'<h1><a href="/">Toolbench</a></h1><div class="content"><h2>{html.escape(heading)}</h2>'
        + body
        + '</div></div><div class="footer">Toolbench</div></body></html>'
    )
    return HTMLResponse(page, status_code=status_code)


def render_error(message: str) -> str:
    return f'<div class="error">{html.escape(message)}</div>'
