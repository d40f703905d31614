"""Shared fixtures."""

import sys
import textwrap

import pytest

PAGES_SOURCE = '''
from htmlcraft import get_path, h

index = h("main",
    h("h1", get_path("title")),
    h.if_("items", h("ul", h.each("items", h("li", get_path("entry"))))),
)

greeting = lambda ctx: "Hello " + str(ctx.get("name", "world"))

class layouts:
    base = h("body", h.safe(get_path("body")))
'''


@pytest.fixture
def pages_module(tmp_path, request):
    """Write a module of renderables into tmp_path and return its name."""
    name = f"pages_{request.node.name.replace('[', '_').replace(']', '_').replace('-', '_')}"
    (tmp_path / f"{name}.py").write_text(textwrap.dedent(PAGES_SOURCE))
    yield name
    sys.modules.pop(name, None)
    if str(tmp_path) in sys.path:
        sys.path.remove(str(tmp_path))
