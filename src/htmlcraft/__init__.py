"""htmlcraft - composable HTML string rendering.

Describe markup as a tree of small renderable values and render it lazily
against a context:

    from htmlcraft import h, get_path

    card = h("div.card", h("h2", get_path("title")), h.safe(get_path("body")))
    card({"title": "Hi & bye", "body": "<p>raw</p>"})
"""

# Engine (core abstractions)
from htmlcraft.engine import (
    Element,
    Node,
    TagDescriptor,
    each,
    element,
    group,
    if_,
    render,
    render_to_string,
    safe,
    within,
)
from htmlcraft.builder import h

# Support
from htmlcraft.context import Scope, root_of
from htmlcraft.escape import escape
from htmlcraft.exceptions import (
    ArgumentTypeError,
    ConfigError,
    HtmlcraftError,
    LoaderError,
    RenderTypeError,
)
from htmlcraft.helpers import ensure_fn, get_path, when
from htmlcraft._version import __version__

__all__ = [
    # Builder
    "h",
    "element",
    "each",
    "within",
    "group",
    "safe",
    "if_",
    # Core classes
    "Node",
    "Element",
    "TagDescriptor",
    "Scope",
    "render",
    "render_to_string",
    "root_of",
    "escape",
    # Helpers
    "get_path",
    "ensure_fn",
    "when",
    # Errors
    "HtmlcraftError",
    "ArgumentTypeError",
    "RenderTypeError",
    "LoaderError",
    "ConfigError",
    "__version__",
]
