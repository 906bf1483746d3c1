"""Tool discovery: find, instantiate and cache every enabled tool."""

import importlib
import inspect
import logging
import pkgutil
import threading
from typing import Iterator, List, Optional, Sequence, Tuple, Type

from .errors import ToolConstructionError
from .tools.base import Tool

logger = logging.getLogger(__name__)

TOOL_PACKAGES = ("toolbench.tools",)

_tools_cache: Optional[Tuple[Tool, ...]] = None
_tools_lock = threading.Lock()


def load_package(package_name: str) -> None:
    """Import a package and all of its submodules."""
    package = importlib.import_module(package_name)
    if not hasattr(package, "__path__"):
        return
    for module_info in pkgutil.walk_packages(package.__path__, prefix=package.__name__ + "."):
        importlib.import_module(module_info.name)


def iter_tool_types(base: Type[Tool] = Tool) -> Iterator[Type[Tool]]:
    """Yield every loaded subclass of ``base``, depth first in definition order."""
    seen = set()

    def walk(cls: type) -> Iterator[type]:
        for subclass in cls.__subclasses__():
            if subclass in seen:
                continue
            seen.add(subclass)
            yield subclass
            yield from walk(subclass)

    yield from walk(base)


def _in_packages(module_name: str, packages: Sequence[str]) -> bool:
    return any(module_name == p or module_name.startswith(p + ".") for p in packages)


def _instantiate(tool_type: Type[Tool]) -> Tool:
    try:
        return tool_type()
    except Exception as e:
        raise ToolConstructionError(tool_type, e) from e


def discover_tools(
    base: Type[Tool] = Tool, packages: Optional[Sequence[str]] = TOOL_PACKAGES
) -> Tuple[Tool, ...]:
    """Instantiate every concrete tool class and keep the enabled ones.

    Args:
        base: Contract whose subclasses are scanned.
        packages: Packages imported before the scan; only classes defined in
            them are considered. None or empty scans every loaded subclass.

    Returns:
        Enabled tool instances in scan order.

    Raises:
        ToolConstructionError: If a tool class cannot be built without arguments.
    """
    for package in packages or ():
        load_package(package)

    instances: List[Tool] = []
    for tool_type in iter_tool_types(base):
        if inspect.isabstract(tool_type):
            continue
        if packages and not _in_packages(tool_type.__module__, packages):
            continue
        instances.append(_instantiate(tool_type))

    return tuple(tool for tool in instances if tool.enabled)


def get_tools() -> Tuple[Tool, ...]:
    """Process-wide tool set, discovered on first access."""
    global _tools_cache
    if _tools_cache is None:
        with _tools_lock:
            if _tools_cache is None:
                tools = discover_tools()
                logger.info(
                    "Discovered %d tools: %s",
                    len(tools),
                    ", ".join(type(t).__name__ for t in tools),
                )
                _tools_cache = tools
    return _tools_cache
