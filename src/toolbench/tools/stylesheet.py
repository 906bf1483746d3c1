"""Serves the stylesheet shared by every tool page."""

from starlette.requests import Request
from starlette.responses import Response

from ..assets import AssetSource
from .base import Tool


class Stylesheet(Tool):
    url_name = "css"
    listed = False

    def __init__(self):
        self.assets = AssetSource()

    async def handle(self, request: Request) -> Response:
        return Response(self.assets.stylesheet, media_type="text/css")
