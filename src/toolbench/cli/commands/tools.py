"""Implements 'toolbench tools'."""

from ...discovery import get_tools
from ...models import describe_tools
from ..render import Renderer


def tools_command(renderer: Renderer, show_all: bool = False) -> int:
    infos = describe_tools([tool for tool in get_tools() if show_all or tool.listed])
    if renderer.json_output:
        renderer.print_json([info.model_dump() for info in infos])
        return 0

    rows = [
        {
            "name": info.name,
            "path": info.path,
            "listed": info.listed,
            "description": info.description,
        }
        for info in infos
    ]
    renderer.print_table(rows, title="Tools")
    return 0
