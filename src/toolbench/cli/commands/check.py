"""
Tool identity verification command.

Implements 'toolbench check', the verification pass that must succeed before
a build ships.
"""

from typing import Optional

from ...discovery import TOOL_PACKAGES, discover_tools
from ...errors import ToolConstructionError
from ...validation import format_report, validate
from ..render import Renderer


def check_command(renderer: Renderer, package: Optional[str] = None) -> int:
    """Discover tools and validate their identities.

    Returns:
        0 if the tool set is consistent, 1 on defects, 2 if a tool cannot be built.
    """
    packages = (package,) if package else TOOL_PACKAGES
    try:
        tools = discover_tools(packages=packages)
    except ToolConstructionError as e:
        renderer.print_error(str(e))
        return 2

    defects = validate(tools)

    if renderer.json_output:
        renderer.print_json(
            {
                "tools": len(tools),
                "defects": [
                    {
                        "kind": d.kind.value,
                        "tool": d.location,
                        "message": d.message,
                    }
                    for d in defects
                ],
            }
        )
    elif defects:
        renderer.print_error(format_report(defects))
    else:
        renderer.print_success(f"Checked {len(tools)} tools. {format_report(defects)}")

    return 1 if defects else 0
