"""The ``h`` namespace.

``h`` is callable like ``element`` and carries the combinators as methods,
so a whole tree can be written against a single name:

    page = h("ul#users",
        h.each("users",
            h("li", {"class": {"admin": get_path("entry.admin")}}, get_path("entry.name")),
        ),
        h.if_("more", h("a.more", href="/users?page=2")),
    )
    page({"users": [...], "more": True})
"""

from __future__ import annotations

from typing import Any

from htmlcraft.engine.combinators import Each, Group, If, Safe, Within, each, group, if_, safe, within
from htmlcraft.engine.element import Element, element


class HtmlBuilder:
    """Callable namespace over the element builder and the combinators."""

    def __call__(self, descriptor: str, *args: Any, **attrs: Any) -> Element:
        return element(descriptor, *args, **attrs)

    def each(self, collection: Any, *content: Any) -> Each:
        return each(collection, *content)

    def within(self, getter: Any, *content: Any) -> Within:
        return within(getter, *content)

    def group(self, *content: Any) -> Group:
        return group(*content)

    def safe(self, *content: Any) -> Safe:
        return safe(*content)

    def if_(self, condition: Any, if_true: Any, if_false: Any = None) -> If:
        return if_(condition, if_true, if_false)

    def __repr__(self) -> str:
        return "<htmlcraft.h>"


h = HtmlBuilder()
