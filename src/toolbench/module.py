"""The toolbox module: settings, cached routing tree and request dispatch."""

import logging
import threading
from typing import Optional, Sequence, Tuple

from starlette.requests import Request
from starlette.responses import Response

from .assets import FAVICON_MEDIA_TYPE, FAVICON_PATH, AssetSource
from .discovery import get_tools
from .routing import UrlResolver, build_routing
from .settings import SettingsStore, ToolboxSettings, load_settings
from .tools.base import Tool

logger = logging.getLogger(__name__)


class ToolboxModule:
    """Single HTTP entry point for every tool.

    Args:
        settings: Settings to mount routes with. :meth:`init` replaces them.
        tools: Tool set to route to. Defaults to the process-wide discovered set.
        assets: Source of the favicon payload.
    """

    def __init__(
        self,
        settings: Optional[ToolboxSettings] = None,
        tools: Optional[Sequence[Tool]] = None,
        assets: Optional[AssetSource] = None,
    ):
        self.settings = settings or ToolboxSettings()
        self._tools = tuple(tools) if tools is not None else None
        self.assets = assets or AssetSource()
        self._resolver: Optional[UrlResolver] = None
        self._resolver_lock = threading.Lock()

    def init(self, store: SettingsStore) -> None:
        """Load settings once at startup, writing defaults back if none were stored."""
        self.settings = load_settings(store)
        logger.info("Loaded settings from %s (use_domain=%s)", store.path, self.settings.use_domain)

    @property
    def tools(self) -> Tuple[Tool, ...]:
        if self._tools is None:
            return get_tools()
        return self._tools

    @property
    def listed_tools(self) -> Tuple[Tool, ...]:
        return tuple(tool for tool in self.tools if tool.listed)

    @property
    def resolver(self) -> UrlResolver:
        """Routing tree, built on first access and kept for the module's lifetime."""
        if self._resolver is None:
            with self._resolver_lock:
                if self._resolver is None:
                    self._resolver = build_routing(self.tools, self.settings.use_domain)
                    logger.info("Built routing tree with %d tool mounts", len(self._resolver))
        return self._resolver

    async def dispatch(self, request: Request) -> Response:
        request.state.module = self
        if request.url.path == FAVICON_PATH:
            return Response(self.assets.favicon, media_type=FAVICON_MEDIA_TYPE)
        return await self.resolver.handle(request)
