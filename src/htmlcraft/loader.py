"""Loading renderables by reference.

A reference has the form ``package.module:attribute``, where the attribute
part may itself be dotted (``site.pages:layouts.base``).
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from typing import Any, Iterable

from htmlcraft.exceptions import LoaderError

log = logging.getLogger(__name__)


def parse_ref(ref: str) -> tuple[str, str]:
    """Split a reference into module path and attribute path.

    Examples:
        >>> parse_ref("site.pages:index")
        ('site.pages', 'index')
    """
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise LoaderError(ref, "expected 'module:attribute'")
    return module_name, attr_path


def extend_search_path(paths: Iterable[str | Path]) -> None:
    """Prepend directories to ``sys.path`` so user modules can be imported."""
    for path in paths:
        entry = str(Path(path).resolve())
        if entry not in sys.path:
            log.debug("Adding %s to import path", entry)
            sys.path.insert(0, entry)


def load_renderable(ref: str, search_path: Iterable[str | Path] = ()) -> Any:
    """Import the object named by ``ref``.

    Args:
        ref: ``package.module:attribute`` reference
        search_path: Extra directories to import from

    Returns:
        The referenced object (usually a Node or a function of context)

    Raises:
        LoaderError: If the module or attribute cannot be found
    """
    module_name, attr_path = parse_ref(ref)
    extend_search_path(search_path)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(ref, f"cannot import module '{module_name}' ({e})") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise LoaderError(ref, f"no attribute '{attr}'") from e

    log.info("Loaded %s", ref)
    return obj
