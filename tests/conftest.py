import sys
from pathlib import Path

import pytest
from starlette.responses import PlainTextResponse

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from toolbench.tools.base import Tool


def make_tool_class(class_name, name=None, url_name=None, enabled=True, listed=True, base=Tool, **attrs):
    """Build a concrete tool class whose handler echoes its class and path."""

    async def handle(self, request):
        return PlainTextResponse(f"{class_name} handled {request.url.path}")

    namespace = {
        "name": name,
        "url_name": url_name,
        "enabled": enabled,
        "listed": listed,
        "handle": handle,
    }
    namespace.update(attrs)
    return type(base)(class_name, (base,), namespace)


@pytest.fixture
def make_tool():
    """Factory for tool instances that are invisible to package discovery."""

    def factory(class_name, **kwargs):
        return make_tool_class(class_name, **kwargs)()

    return factory


@pytest.fixture
def make_tool_type():
    return make_tool_class
