"""Tests for the htmlcraft command line."""

import logging

import pytest
import yaml
from typer.testing import CliRunner

from htmlcraft import __version__
from htmlcraft.cli import setup_logging, typer_app

runner = CliRunner()


def test_version():
    """--version prints the version and exits."""
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_to_stdout(tmp_path, pages_module):
    """render prints the HTML of a renderable."""
    result = runner.invoke(
        typer_app,
        ["render", f"{pages_module}:index", "-p", str(tmp_path), "-s", "title=Hi & bye"],
    )
    assert result.exit_code == 0, result.output
    assert result.output == "<main><h1>Hi &amp; bye</h1></main>"


def test_render_with_context_file_and_output(tmp_path, pages_module):
    """Context files feed the render and -o writes the result."""
    ctx = tmp_path / "ctx.yaml"
    ctx.write_text(yaml.safe_dump({"title": "T", "items": [1, 2]}))
    out = tmp_path / "build" / "index.html"

    result = runner.invoke(
        typer_app,
        ["render", f"{pages_module}:index", "-p", str(tmp_path), "-c", str(ctx), "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert out.read_text() == "<main><h1>T</h1><ul><li>1</li><li>2</li></ul></main>"


def test_render_safe(tmp_path, pages_module):
    """--safe disables escaping."""
    result = runner.invoke(
        typer_app,
        ["render", f"{pages_module}:index", "-p", str(tmp_path), "-s", "title=<b>", "--safe"],
    )
    assert result.exit_code == 0, result.output
    assert result.output == "<main><h1><b></h1></main>"


def test_render_unknown_reference(tmp_path):
    """Load failures are reported with exit code 1."""
    result = runner.invoke(typer_app, ["render", "htmlcraft_missing_mod:x", "-p", str(tmp_path)])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_render_engine_error(tmp_path):
    """Engine errors surface as CLI errors, not tracebacks."""
    (tmp_path / "broken_pages.py").write_text("page = [{'not': 'renderable'}]\n")
    result = runner.invoke(typer_app, ["render", "broken_pages:page", "-p", str(tmp_path)])
    assert result.exit_code == 1
    assert "Cannot render value of type dict" in result.output


def test_build(tmp_path, pages_module):
    """build renders every target of the config file."""
    config = tmp_path / "htmlcraft.yaml"
    config.write_text(
        yaml.safe_dump(
            {
                "search_path": ["."],
                "context": {"title": "Site"},
                "targets": {
                    "index": {"renderable": f"{pages_module}:index", "output": "site/index.html"},
                    "hello": {"renderable": f"{pages_module}:greeting"},
                },
            }
        )
    )

    result = runner.invoke(typer_app, ["build", "-f", str(config)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "site" / "index.html").read_text() == "<main><h1>Site</h1></main>"
    assert "Hello world" in result.output


def test_build_unknown_target(tmp_path):
    """Unknown target names fail the build."""
    config = tmp_path / "htmlcraft.yaml"
    config.write_text("targets: {}\n")
    result = runner.invoke(typer_app, ["build", "nope", "-f", str(config)])
    assert result.exit_code == 1
    assert "Unknown target 'nope'" in result.output


def test_build_without_config(tmp_path, monkeypatch):
    """build requires a config file."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(typer_app, ["build"])
    assert result.exit_code == 1
    assert "No htmlcraft.yaml found" in result.output


@pytest.mark.parametrize(
    "verbose,debug,level",
    [(False, False, logging.WARNING), (True, False, logging.INFO), (False, True, logging.DEBUG)],
)
def test_setup_logging_levels(monkeypatch, verbose, debug, level):
    """-v raises the package logger to INFO, HTMLCRAFT_DEBUG to DEBUG."""
    if debug:
        monkeypatch.setenv("HTMLCRAFT_DEBUG", "1")
    else:
        monkeypatch.delenv("HTMLCRAFT_DEBUG", raising=False)

    setup_logging(verbose)

    logger = logging.getLogger("htmlcraft")
    assert logger.level == level
    assert len(logger.handlers) == 1
    assert logger.propagate is False
