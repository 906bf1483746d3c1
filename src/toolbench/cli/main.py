"""
Main CLI application for Toolbench.

Provides the Typer application with global flags and the check, tools and
serve commands.
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from .. import __version__
from .commands.check import check_command
from .commands.tools import tools_command
from .render import Renderer

app = typer.Typer(
    name="toolbench",
    help="Toolbench - small web tools behind a single HTTP entry point",
    no_args_is_help=True,
    add_completion=False,
)

_renderer: Optional[Renderer] = None


def get_renderer() -> Renderer:
    """Get global renderer instance."""
    if _renderer is None:
        raise RuntimeError("Renderer not initialized")
    return _renderer


def version_callback(value: bool):
    if value:
        typer.echo(f"toolbench {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    json_output: Annotated[bool, typer.Option("--json", help="Machine-output mode")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = None,
):
    """
    Toolbench command-line interface.

    Examples:
      toolbench check

      toolbench tools --all

      toolbench serve --port 9000
    """
    global _renderer
    _renderer = Renderer(json_output=json_output)


@app.command("check")
def check(
    package: Annotated[
        Optional[str], typer.Option("--package", help="Package to scan instead of toolbench.tools")
    ] = None,
):
    """Verify that tool names and URL names are unique and well formed."""
    exit_code = check_command(get_renderer(), package=package)
    raise typer.Exit(exit_code)


@app.command("tools")
def tools(
    show_all: Annotated[bool, typer.Option("--all", "-a", help="Include unlisted tools")] = False,
):
    """List discovered tools."""
    raise typer.Exit(tools_command(get_renderer(), show_all=show_all))


@app.command("serve")
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port")] = None,
    settings_file: Annotated[
        Optional[Path], typer.Option("--settings-file", help="JSON settings document")
    ] = None,
):
    """Run the HTTP server."""
    from ..config import ServerConfig
    from ..server import run

    overrides = {
        key: value
        for key, value in {"host": host, "port": port, "settings_file": settings_file}.items()
        if value is not None
    }
    config = ServerConfig(**overrides)

    get_renderer().print(f"Serving Toolbench on http://{config.host}:{config.port}")
    run(config)


if __name__ == "__main__":
    app()
