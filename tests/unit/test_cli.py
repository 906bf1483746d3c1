"""
Unit tests for the Toolbench CLI.

Covers the verification command's exit codes and the tool listing output.
"""

import json
import textwrap

import pytest
from starlette.responses import PlainTextResponse
from typer.testing import CliRunner

from toolbench import __version__
from toolbench.cli.main import app
from toolbench.discovery import discover_tools
from toolbench.tools.base import Tool

runner = CliRunner()


@pytest.fixture
def tool_package(tmp_path, monkeypatch):
    """Write a throwaway tools package and put it on sys.path."""

    def create(package_name, source):
        package_dir = tmp_path / package_name
        package_dir.mkdir()
        (package_dir / "__init__.py").write_text("")
        (package_dir / "tools.py").write_text(textwrap.dedent(source))
        monkeypatch.syspath_prepend(str(tmp_path))
        return package_name

    return create


TOOL_TEMPLATE = """
from starlette.responses import PlainTextResponse
from toolbench.tools.base import Tool


class {cls}(Tool):
    name = {name!r}
    url_name = {url_name!r}

    async def handle(self, request):
        return PlainTextResponse("{cls}")
"""


def test_check_passes_for_builtin_tools():
    """Test the shipped tool set verifies cleanly."""
    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0
    assert "Checked 4 tools" in result.output


def test_check_json_output():
    result = runner.invoke(app, ["--json", "check"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data == {"tools": 4, "defects": []}


def test_check_fails_on_duplicate_url(tool_package):
    """Test a duplicate URL halts verification with a report."""
    source = TOOL_TEMPLATE.format(cls="One", name="One", url_name="same") + TOOL_TEMPLATE.format(
        cls="Two", name="Two", url_name="same"
    )
    package = tool_package("dup_url_tools", source)

    result = runner.invoke(app, ["check", "--package", package])

    assert result.exit_code == 1
    assert "duplicate_url_name" in result.output
    assert "dup_url_tools.tools.Two" in result.output


def test_check_reports_every_defect_as_json(tool_package):
    source = (
        TOOL_TEMPLATE.format(cls="Home", name=None, url_name=None)
        + TOOL_TEMPLATE.format(cls="OtherHome", name=None, url_name=None)
        + TOOL_TEMPLATE.format(cls="Blank", name="Blank", url_name="")
    )
    package = tool_package("bad_root_tools", source)

    result = runner.invoke(app, ["--json", "check", "--package", package])

    assert result.exit_code == 1
    kinds = sorted(d["kind"] for d in json.loads(result.output)["defects"])
    assert kinds == ["empty_url_name", "multiple_root_tools"]


def test_check_construction_failure(tool_package):
    """Test a tool that cannot be built without arguments exits with status 2."""
    source = """
    from starlette.responses import PlainTextResponse
    from toolbench.tools.base import Tool


    class Picky(Tool):
        url_name = "picky"

        def __init__(self, required):
            self.required = required

        async def handle(self, request):
            return PlainTextResponse("picky")
    """
    package = tool_package("picky_tools", source)

    result = runner.invoke(app, ["check", "--package", package])

    assert result.exit_code == 2
    assert "Cannot construct tool" in result.output


def test_tools_lists_listed_tools():
    result = runner.invoke(app, ["tools"])

    assert result.exit_code == 0
    assert "Base64" in result.output
    assert "/base64" in result.output


def test_tools_all_as_json():
    result = runner.invoke(app, ["--json", "tools", "--all"])

    assert result.exit_code == 0
    url_names = {tool["url_name"] for tool in json.loads(result.output)}
    assert url_names == {None, "css", "base64", "url"}


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.fixture
def uvicorn_calls(monkeypatch):
    """Record uvicorn.run calls instead of starting a server."""
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr("uvicorn.run", fake_run)
    return calls


def test_serve_runs_app_with_overrides(tmp_path, uvicorn_calls):
    settings_file = tmp_path / "settings.json"

    result = runner.invoke(app, ["serve", "--port", "9001", "--settings-file", str(settings_file)])

    assert result.exit_code == 0
    assert "Serving Toolbench on http://127.0.0.1:9001" in result.output
    assert len(uvicorn_calls) == 1
    server_app, kwargs = uvicorn_calls[0]
    assert kwargs["port"] == 9001
    assert kwargs["host"] == "127.0.0.1"
    assert server_app.state.module.resolver is not None
    assert json.loads(settings_file.read_text()) == {"use_domain": None}


def test_serve_exits_before_serving_when_tool_cannot_be_built(tmp_path, monkeypatch, uvicorn_calls):
    """Test a tool construction failure exits with status 1 and never starts uvicorn."""

    class Base(Tool):
        pass

    class Picky(Base):
        url_name = "picky"

        def __init__(self, required):
            self.required = required

        async def handle(self, request):
            return PlainTextResponse("picky")

    monkeypatch.setattr("toolbench.module.get_tools", lambda: discover_tools(base=Base, packages=None))

    result = runner.invoke(app, ["serve", "--settings-file", str(tmp_path / "settings.json")])

    assert result.exit_code == 1
    assert uvicorn_calls == []


def test_serve_interrupt_exits_cleanly(tmp_path, monkeypatch):
    def interrupted(app, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr("uvicorn.run", interrupted)

    result = runner.invoke(app, ["serve", "--settings-file", str(tmp_path / "settings.json")])

    assert result.exit_code == 0
