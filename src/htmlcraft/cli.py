"""htmlcraft CLI

Usage:
    htmlcraft render site.pages:index                  # render to stdout
    htmlcraft render site.pages:index -c data.yaml     # with a context file
    htmlcraft render site.pages:index -s title=Home    # with inline values
    htmlcraft render site.pages:index -o out.html      # write to file
    htmlcraft build                                    # build all targets in htmlcraft.yaml
    htmlcraft build index about -f path/htmlcraft.yaml # build selected targets
    htmlcraft --version
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from htmlcraft._version import __version__
from htmlcraft.config import HtmlcraftConfig, find_config, load_context_file, parse_assignments
from htmlcraft.engine.protocol import render_to_string
from htmlcraft.exceptions import HtmlcraftError
from htmlcraft.loader import load_renderable
from htmlcraft.project import build, write_output

log = logging.getLogger(__name__)

console = Console(stderr=True)

typer_app = typer.Typer(no_args_is_help=True, add_completion=False)


def setup_logging(verbose: bool = False) -> None:
    """Route the package logger to stderr: warnings, INFO with -v, DEBUG with HTMLCRAFT_DEBUG."""
    debug = bool(os.environ.get("HTMLCRAFT_DEBUG"))
    logger = logging.getLogger("htmlcraft")
    logger.setLevel(logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING)
    logger.handlers = [RichHandler(console=console, show_time=False, show_path=debug)]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=exit_code)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"htmlcraft {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Render composable HTML trees from Python modules."""


@typer_app.command("render")
def render_command(
    target: str = typer.Argument(..., help="Renderable reference, e.g. 'site.pages:index'."),
    context_file: Optional[Path] = typer.Option(
        None, "-c", "--context", help="YAML or JSON file with the render context."
    ),
    assignments: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Context value as key=value (repeatable)."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write HTML to file instead of stdout."
    ),
    safe: bool = typer.Option(False, "--safe", help="Disable escaping."),
    search_path: Optional[List[Path]] = typer.Option(
        None, "-p", "--path", help="Directory to import renderables from (repeatable)."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show progress."),
) -> None:
    """Render a single renderable against a context."""
    setup_logging(verbose)

    try:
        context = load_context_file(context_file) if context_file else {}
        context.update(parse_assignments(assignments or []))

        renderable = load_renderable(target, search_path or [Path.cwd()])
        html = render_to_string(renderable, context, escaped=safe)
    except (HtmlcraftError, OSError, yaml.YAMLError) as exc:
        exit_with_error(str(exc))

    if output is None:
        sys.stdout.write(html)
        return

    try:
        write_output(output, html)
    except OSError as exc:
        exit_with_error(str(exc))
    console.print(f"[green]Wrote {output}[/green]")


@typer_app.command("build")
def build_command(
    names: Optional[List[str]] = typer.Argument(None, help="Targets to build (default: all)."),
    config_file: Optional[Path] = typer.Option(
        None, "-f", "--config", help="Path to htmlcraft.yaml."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show progress."),
) -> None:
    """Build the targets declared in htmlcraft.yaml."""
    setup_logging(verbose)

    path = config_file or find_config()
    if path is None or not path.exists():
        exit_with_error("No htmlcraft.yaml found in current directory or parents.")

    try:
        config = HtmlcraftConfig.load(path)
        results = build(config, names or None)
    except (HtmlcraftError, OSError, yaml.YAMLError) as exc:
        exit_with_error(str(exc))

    for name, result in results.items():
        if isinstance(result, Path):
            console.print(f"[green]{name}[/green] -> {result}")
        else:
            sys.stdout.write(result)

    log.info("Built %d target(s)", len(results))


def app() -> None:
    """Entry point for the CLI."""
    typer_app()


if __name__ == "__main__":
    app()
