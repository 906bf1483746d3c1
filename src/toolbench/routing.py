"""Two-level URL routing: segment to tool, then tool-owned sub-paths."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple

from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response

from .errors import ToolHandlerError, UnmatchedRoute
from .tools.base import Tool

logger = logging.getLogger(__name__)

# Receives the request and the part of the path below the matched hook.
Handler = Callable[[Request, str], Awaitable[Response]]


@dataclass(frozen=True)
class UrlHook:
    """Describes which requests a resolver entry accepts.

    A non-specific hook accepts its path and everything below it; a specific
    hook accepts only its exact path (with or without a trailing slash).
    ``domain`` restricts the hook to that host and its subdomains.
    """

    path: str = ""
    domain: Optional[str] = None
    specific: bool = False

    def __post_init__(self):
        if self.path and (not self.path.startswith("/") or self.path.endswith("/")):
            raise ValueError(f"Hook path must be empty or start (but not end) with '/': {self.path!r}")

    def match_domain(self, host: Optional[str]) -> bool:
        if self.domain is None:
            return True
        if not host:
            return False
        host = host.lower()
        domain = self.domain.lower()
        return host == domain or host.endswith("." + domain)

    def match_path(self, path: str) -> Optional[str]:
        """Return the remaining path below the hook, or None if it does not match."""
        if path == self.path:
            return ""
        if self.specific:
            return "/" if path == self.path + "/" else None
        if path.startswith(self.path + "/"):
            return path[len(self.path):]
        return None

    @property
    def sort_key(self) -> Tuple[int, bool, bool]:
        return (-len(self.path), not self.specific, self.domain is None)


class UrlResolver:
    """Ordered table of hooks; the most specific matching hook handles a request."""

    def __init__(self, domain: Optional[str] = None):
        self.domain = domain
        self._hooks: List[Tuple[UrlHook, Handler]] = []

    def add(self, hook: UrlHook, handler: Handler) -> None:
        self._hooks.append((hook, handler))
        # Stable sort keeps registration order among equally specific hooks.
        self._hooks.sort(key=lambda entry: entry[0].sort_key)

    def route(self, path: str, handler: Handler, specific: bool = True) -> None:
        """Add a hook restricted to this resolver's domain."""
        self.add(UrlHook(path, self.domain, specific=specific), handler)

    @property
    def hooks(self) -> List[UrlHook]:
        return [hook for hook, _ in self._hooks]

    def __len__(self) -> int:
        return len(self._hooks)

    async def handle(self, request: Request, path: Optional[str] = None) -> Response:
        """Resolve ``path`` (default: the request path) and run the matching handler.

        Raises:
            UnmatchedRoute: If no hook accepts the request.
        """
        if path is None:
            path = request.url.path
        host = request.url.hostname
        for hook, handler in self._hooks:
            if not hook.match_domain(host):
                continue
            remaining = hook.match_path(path)
            if remaining is None:
                continue
            return await handler(request, remaining)
        raise UnmatchedRoute(path)


def mount_path(tool: Tool) -> str:
    return "/" + tool.url_name if tool.url_name else ""


def _tool_resolver(tool: Tool, domain: Optional[str]) -> UrlResolver:
    resolver = UrlResolver(domain)

    async def invoke(request: Request, sub_path: str) -> Response:
        return await tool.handle(request)

    resolver.route("", invoke, specific=True)
    tool.extend_routes(resolver)
    return resolver


def _mount(tool: Tool, inner: UrlResolver) -> Handler:
    async def handler(request: Request, sub_path: str) -> Response:
        request.state.tool = tool
        try:
            return await inner.handle(request, sub_path)
        except HTTPException:
            raise
        except Exception as e:
            logger.exception("Tool %s failed on %s", type(tool).__name__, request.url.path)
            raise ToolHandlerError(type(tool), request.url.path, e) from e

    return handler


def build_routing(tools: Iterable[Tool], domain: Optional[str] = None) -> UrlResolver:
    """Build the outer resolver mapping each tool's segment to its own resolver."""
    resolver = UrlResolver(domain)
    for tool in tools:
        path = mount_path(tool)
        resolver.add(UrlHook(path, domain), _mount(tool, _tool_resolver(tool, domain)))
        logger.debug("Mounted %s at %r", type(tool).__name__, path or "/")
    return resolver
