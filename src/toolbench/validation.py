"""Build-time consistency checks over the discovered tool set."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple


class DefectKind(str, Enum):
    """Which tool identity rule was broken."""

    DUPLICATE_NAME = "duplicate_name"
    DUPLICATE_URL_NAME = "duplicate_url_name"
    MULTIPLE_ROOT_TOOLS = "multiple_root_tools"
    EMPTY_URL_NAME = "empty_url_name"


@dataclass(frozen=True)
class Defect:
    """A single violation found by :func:`validate`."""

    kind: DefectKind
    message: str
    tool: type
    original: Optional[type] = None

    @property
    def location(self) -> str:
        return f"class {_describe(self.tool)}"


def _describe(tool_type: type) -> str:
    return f"{tool_type.__module__}.{tool_type.__qualname__}"


def find_duplicates(
    tools: Iterable[Any], criterion: Callable[[Any], Optional[Hashable]]
) -> List[Tuple[Any, Any]]:
    """Pair every tool with the earlier tool that produced the same criterion value.

    None values never count as duplicates.
    """
    first_seen: Dict[Hashable, Any] = {}
    duplicates = []
    for tool in tools:
        value = criterion(tool)
        if value is None:
            continue
        if value in first_seen:
            duplicates.append((first_seen[value], tool))
        else:
            first_seen[value] = tool
    return duplicates


def _report_duplicates(
    tools: Sequence[Any],
    criterion: Callable[[Any], Optional[Hashable]],
    thing: str,
    kind: DefectKind,
) -> List[Defect]:
    defects = []
    for original, duplicate in find_duplicates(tools, criterion):
        defects.append(
            Defect(
                kind=kind,
                message=(
                    f'The tool {thing} "{criterion(original)}" is used more than once: '
                    f"first by {_describe(type(original))}, again by {_describe(type(duplicate))}."
                ),
                tool=type(duplicate),
                original=type(original),
            )
        )
    return defects


def validate(tools: Iterable[Any]) -> List[Defect]:
    """Check tool identities for consistency.

    Args:
        tools: Tool instances; only ``name`` and ``url_name`` are inspected.

    Returns:
        Every defect found. An empty list means the tool set may ship.
    """
    tools = list(tools)
    defects = _report_duplicates(tools, lambda t: t.name, "name", DefectKind.DUPLICATE_NAME)
    defects += _report_duplicates(tools, lambda t: t.url_name, "URL", DefectKind.DUPLICATE_URL_NAME)

    root_tool = None
    for tool in tools:
        if tool.url_name is None:
            if root_tool is not None:
                defects.append(
                    Defect(
                        kind=DefectKind.MULTIPLE_ROOT_TOOLS,
                        message=(
                            f"Two tools, {_describe(type(root_tool))} and {_describe(type(tool))}, "
                            "have no url_name. Only one tool can be the top-level tool."
                        ),
                        tool=type(tool),
                        original=type(root_tool),
                    )
                )
            else:
                root_tool = tool
        elif tool.url_name == "":
            defects.append(
                Defect(
                    kind=DefectKind.EMPTY_URL_NAME,
                    message=(
                        f"The tool {_describe(type(tool))} has an empty url_name. "
                        "To make it the top-level tool, use None instead."
                    ),
                    tool=type(tool),
                )
            )

    return defects


def format_report(defects: Sequence[Defect]) -> str:
    """Render defects as a human readable report."""
    if not defects:
        return "All tool identities are consistent."
    lines = [f"{len(defects)} tool defect(s) found:"]
    for defect in defects:
        lines.append(f"  [{defect.kind.value}] {defect.location}: {defect.message}")
    return "\n".join(lines)
