"""Tests for tool discovery."""

import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from starlette.responses import PlainTextResponse

from toolbench import discovery
from toolbench.discovery import discover_tools, get_tools, iter_tool_types
from toolbench.errors import ToolConstructionError
from toolbench.tools.base import Tool


class StrayTool(Tool):
    """Concrete tool defined outside the tools package."""

    url_name = "stray"

    async def handle(self, request):
        return PlainTextResponse("stray")


def test_discovers_concrete_subclasses_in_order():
    """Test concrete tools are instantiated once each, in definition order."""

    class Base(Tool):
        pass

    class First(Base):
        url_name = "first"

        async def handle(self, request):
            return PlainTextResponse("first")

    class Second(Base):
        url_name = "second"

        async def handle(self, request):
            return PlainTextResponse("second")

    tools = discover_tools(base=Base, packages=None)

    assert [type(t) for t in tools] == [First, Second]
    assert isinstance(tools, tuple)


def test_skips_abstract_intermediate_classes():
    """Test abstract subclasses are walked through but not instantiated."""

    class Base(Tool):
        pass

    class Intermediate(Base):
        listed = False

    class Leaf(Intermediate):
        url_name = "leaf"

        async def handle(self, request):
            return PlainTextResponse("leaf")

    assert list(iter_tool_types(Base)) == [Intermediate, Leaf]
    assert [type(t) for t in discover_tools(base=Base, packages=None)] == [Leaf]


def test_filters_disabled_tools():
    """Test disabled tools never appear in the result."""

    class Base(Tool):
        pass

    class On(Base):
        url_name = "on"

        async def handle(self, request):
            return PlainTextResponse("on")

    class Off(Base):
        url_name = "off"
        enabled = False

        async def handle(self, request):
            return PlainTextResponse("off")

    tools = discover_tools(base=Base, packages=None)

    assert [t.url_name for t in tools] == ["on"]


def test_construction_failure_is_fatal():
    """Test a tool that needs constructor arguments aborts discovery."""

    class Base(Tool):
        pass

    class NeedsArgs(Base):
        url_name = "needs-args"

        def __init__(self, config):
            self.config = config

        async def handle(self, request):
            return PlainTextResponse("never")

    with pytest.raises(ToolConstructionError, match="NeedsArgs") as exc_info:
        discover_tools(base=Base, packages=None)

    assert exc_info.value.tool_type is NeedsArgs
    assert isinstance(exc_info.value.cause, TypeError)


def test_package_scan_finds_builtin_tools_only():
    """Test the default scan loads the tools package and ignores other modules."""
    tools = discover_tools()
    names = {type(t).__name__ for t in tools}

    assert names == {"HomePage", "Stylesheet", "Base64Tool", "UrlEncodingTool"}
    assert StrayTool not in {type(t) for t in tools}
    assert "toolbench.tools.encoding" in sys.modules


def test_get_tools_is_idempotent():
    """Test repeated access returns the very same cached tuple."""
    first = get_tools()
    second = get_tools()

    assert first is second
    fresh = discover_tools()
    assert [(type(t), t.name, t.url_name) for t in first] == [
        (type(t), t.name, t.url_name) for t in fresh
    ]


def test_get_tools_concurrent_first_access(monkeypatch):
    """Test simultaneous first access runs discovery once and shares the result."""
    monkeypatch.setattr(discovery, "_tools_cache", None)
    calls = []
    barrier = threading.Barrier(8)
    real_discover = discovery.discover_tools

    def slow_discover():
        calls.append(1)
        time.sleep(0.05)
        return real_discover()

    monkeypatch.setattr(discovery, "discover_tools", slow_discover)

    def access():
        barrier.wait()
        return get_tools()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: access(), range(8)))

    assert len(calls) == 1
    assert all(result is results[0] for result in results)
