"""Combinators - higher-order renderables built from other renderables.

- each:   render content once per item of a collection, in a derived scope
- within: render content in a scope built from part of the context
- group:  render content in sequence, no wrapping markup
- safe:   render content with escaping disabled
- if_:    pick one of two renderables from a condition
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from htmlcraft.context import Scope
from htmlcraft.engine.node import Node
from htmlcraft.engine.protocol import render
from htmlcraft.exceptions import RenderTypeError
from htmlcraft.helpers import ensure_fn, when


class Each(Node):
    """Iterates a collection taken from the context.

    Each item is rendered against a scope holding ``entry``, ``index`` and
    ``parent`` (the outer context), with ``$root`` carried over unchanged.
    """

    def __init__(self, collection: Any, content: tuple[Any, ...]):
        self.getter = ensure_fn(collection)
        self.content = content

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        collection = self.getter(context)
        if not collection:
            return
        if isinstance(collection, Mapping):
            collection = collection.values()
        elif not isinstance(collection, Iterable) or isinstance(collection, (str, bytes)):
            raise RenderTypeError(
                type(collection).__name__,
                f"each() expects an iterable, got {type(collection).__name__}",
            )

        for index, entry in enumerate(collection):
            scope = Scope.derive(context, {"entry": entry, "index": index, "parent": context})
            render(self.content, scope, buffer, escaped)


class Within(Node):
    """Renders content against a shallow copy of a sub-context."""

    def __init__(self, getter: Any, content: tuple[Any, ...]):
        self.getter = ensure_fn(getter)
        self.content = content

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        values = self.getter(context)
        if values is not None and not isinstance(values, Mapping):
            raise RenderTypeError(
                type(values).__name__,
                f"within() expects a mapping, got {type(values).__name__}",
            )

        scope = Scope.derive(context, values)
        for entity in self.content:
            render(entity, scope, buffer, escaped)


class Group(Node):
    """Plain concatenation of its content."""

    def __init__(self, content: tuple[Any, ...]):
        self.content = content

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        for entity in self.content:
            render(entity, context, buffer, escaped)


class Safe(Node):
    """Disables escaping for everything below it."""

    def __init__(self, content: tuple[Any, ...]):
        self.content = content

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        render(self.content, context, buffer, True)


class If(Node):
    """Renders ``if_true`` or ``if_false`` depending on a condition."""

    def __init__(self, condition: Any, if_true: Any, if_false: Any = None):
        if isinstance(condition, Mapping):
            self.condition = when(condition)
        else:
            self.condition = ensure_fn(condition)
        self.if_true = if_true
        self.if_false = if_false

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        branch = self.if_true if self.condition(context) else self.if_false
        render(branch, context, buffer, escaped)


# Factory functions


def each(collection: Any, *content: Any) -> Each:
    """Render ``content`` for every item of a collection.

    Args:
        collection: Dotted path (``"items"``, ``"entry.children"``) or a
            function of context returning an iterable; mappings iterate
            over their values
        *content: Renderables evaluated in the per-item scope

    Examples:
        each("users", h("li", get_path("entry.name")))
    """
    return Each(collection, content)


def within(getter: Any, *content: Any) -> Within:
    """Render ``content`` against the mapping selected by ``getter``.

    The new scope is a shallow copy with ``$parent`` and ``$root`` attached.
    """
    return Within(getter, content)


def group(*content: Any) -> Group:
    """Concatenate renderables without wrapping markup."""
    return Group(content)


def safe(*content: Any) -> Safe:
    """Render ``content`` without escaping, however deeply nested."""
    return Safe(content)


def if_(condition: Any, if_true: Any, if_false: Any = None) -> If:
    """Conditional rendering.

    Args:
        condition: Dotted path, function of context, or a matcher mapping
            (see ``helpers.when``)
        if_true: Rendered when the condition is truthy
        if_false: Rendered otherwise; nothing when omitted
    """
    return If(condition, if_true, if_false)
