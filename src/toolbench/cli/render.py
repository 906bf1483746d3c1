"""
Output rendering for the Toolbench CLI.

Rich tables and coloured messages for humans, plain JSON for machines.
"""

import json
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table


class Renderer:
    """Output renderer with support for human and machine formats."""

    def __init__(self, json_output: bool = False, console: Optional[Console] = None):
        self.json_output = json_output
        self.console = console or Console()

    def print(self, message: str, **kwargs) -> None:
        self.console.print(message, soft_wrap=True, **kwargs)

    def print_json(self, data: Any) -> None:
        """Print JSON data."""
        if self.json_output:
            print(json.dumps(data, indent=2))
        else:
            self.console.print_json(json.dumps(data))

    def print_table(self, data: List[Dict[str, Any]], title: Optional[str] = None) -> None:
        """Print data as table."""
        if self.json_output:
            self.print_json(data)
            return

        if not data:
            self.print("No data to display")
            return

        table = Table(title=title)
        for key in data[0].keys():
            table.add_column(key.replace("_", " ").title())
        for row in data:
            table.add_row(*["" if v is None else str(v) for v in row.values()])
        self.console.print(table)

    def print_error(self, message: str) -> None:
        self.console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)

    def print_success(self, message: str) -> None:
        self.console.print(message, style="green", markup=False, soft_wrap=True)
