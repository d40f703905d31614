"""Project builds - rendering the targets declared in htmlcraft.yaml."""

from __future__ import annotations

import logging
from pathlib import Path

from htmlcraft.config import HtmlcraftConfig
from htmlcraft.engine.protocol import render_to_string
from htmlcraft.loader import load_renderable

log = logging.getLogger(__name__)


def render_target(config: HtmlcraftConfig, name: str) -> str:
    """Load, contextualize and render a single target."""
    target = config.get_target(name)
    search_path = [config.resolve_path(p) for p in config.search_path]

    renderable = load_renderable(target.renderable, search_path)
    context = config.target_context(target)

    html = render_to_string(renderable, context, escaped=target.safe)
    log.info("Rendered target %s (%d chars)", name, len(html))
    return html


def write_output(path: Path, html: str) -> None:
    """Write rendered HTML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    log.info("Wrote %s", path)


def build(config: HtmlcraftConfig, names: list[str] | None = None) -> dict[str, Path | str]:
    """Render targets and write the ones that declare an output.

    Args:
        config: Loaded project configuration
        names: Targets to build, all of them when empty

    Returns:
        Target name -> output path, or the rendered HTML for targets
        without an output
    """
    results: dict[str, Path | str] = {}
    for name in names or list(config.targets):
        target = config.get_target(name)
        html = render_target(config, name)
        if target.output:
            path = config.resolve_path(target.output)
            write_output(path, html)
            results[name] = path
        else:
            results[name] = html
    return results
