"""Top-level tool: the index of all listed tools."""

import html

from starlette.requests import Request
from starlette.responses import Response

from .base import Tool, render_page


def matches(tool: Tool, query: str) -> bool:
    """Case-insensitive match of every query word against the tool's metadata."""
    haystack = " ".join(filter(None, [tool.name, tool.keywords, tool.description])).lower()
    return all(word in haystack for word in query.lower().split())


class HomePage(Tool):
    listed = False
    description = "Lists every available tool."

    async def handle(self, request: Request) -> Response:
        query = request.query_params.get("q", "").strip()
        tools = sorted(request.state.module.listed_tools, key=lambda t: (t.name or "").lower())
        if query:
            tools = [tool for tool in tools if matches(tool, query)]

        parts = [
            '<form class="search" method="get" action="/">'
            f'<input type="search" name="q" value="{html.escape(query)}" placeholder="Search">'
            "</form>",
            '<ul class="tools">',
        ]
        for tool in tools:
            parts.append(
                f'<li><a class="toolname" href="/{html.escape(tool.url_name or "")}">'
                f"{html.escape(tool.name or tool.url_name or '')}</a>"
                f'<div class="explain">{html.escape(tool.description or "")}</div></li>'
            )
        parts.append("</ul>")
        if not tools:
            parts.append("<p>No tools match your search.</p>")
        return render_page(self, "".join(parts), title="Tools")
