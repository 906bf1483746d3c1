"""Text encoding tools."""

import base64
import binascii
import html
from urllib.parse import quote, unquote

from starlette.requests import Request
from starlette.responses import Response

from .base import Tool, render_error, render_page


def _form(action: str, text: str, extra: str = "") -> str:
    return (
        f'<form method="get" action="{action}">'
        f'<textarea name="text">{html.escape(text)}</textarea>{extra}'
        '<p><button type="submit">Convert</button></p></form>'
    )


def _output(value: str) -> str:
    return f'<pre class="output">{html.escape(value)}</pre>'


class Base64Tool(Tool):
    name = "Base64"
    url_name = "base64"
    keywords = "base64 encode decode mime binary"
    description = "Encodes UTF-8 text as Base64, and decodes Base64 back to text."

    async def handle(self, request: Request) -> Response:
        text = request.query_params.get("text", "")
        body = _form("/base64", text) + '<p><a href="/base64/decode">Decode instead</a></p>'
        if text:
            body += _output(base64.b64encode(text.encode("utf-8")).decode("ascii"))
        return render_page(self, body, title="Base64 encode")

    async def decode(self, request: Request, sub_path: str) -> Response:
        text = request.query_params.get("text", "")
        body = _form("/base64/decode", text) + '<p><a href="/base64">Encode instead</a></p>'
        if text:
            try:
                decoded = base64.b64decode("".join(text.split()), validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                return render_page(
                    self, body + render_error(f"Not valid Base64 text: {e}"), title="Base64 decode", status_code=400
                )
            body += _output(decoded)
        return render_page(self, body, title="Base64 decode")

    def extend_routes(self, resolver) -> None:
        resolver.route("/decode", self.decode)


class UrlEncodingTool(Tool):
    name = "URL encoding"
    url_name = "url"
    keywords = "url uri percent escape unescape encode decode"
    description = "Percent-encodes text for use in URLs, or decodes it again."

    async def handle(self, request: Request) -> Response:
        text = request.query_params.get("text", "")
        mode = request.query_params.get("mode", "encode")
        if mode not in ("encode", "decode"):
            return render_page(self, render_error(f"Unknown mode: {mode}"), status_code=400)

        options = "".join(
            f'<label><input type="radio" name="mode" value="{value}"{" checked" if value == mode else ""}> {value}</label> '
            for value in ("encode", "decode")
        )
        body = _form("/url", text, f"<p>{options}</p>")
        if text:
            body += _output(quote(text, safe="") if mode == "encode" else unquote(text))
        return render_page(self, body)
