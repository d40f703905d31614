"""Element builder - ``tag#id.class`` descriptors plus attributes and content.

An element is built once and rendered many times:
1. The descriptor is parsed into tag name, id and fixed classes
2. Positional arguments are split into attribute mappings and content
3. On render, every attribute is resolved against the context and the
   opening tag, the content and the closing tag are written to the buffer
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from htmlcraft.engine.node import Node
from htmlcraft.engine.protocol import format_number, format_temporal, render
from htmlcraft.escape import escape
from htmlcraft.exceptions import ArgumentTypeError

log = logging.getLogger(__name__)

BOOLEAN_ATTRIBUTES = frozenset(
    ["hidden", "checked", "required", "readonly", "selected", "disabled", "multiple"]
)


@dataclass(frozen=True)
class TagDescriptor:
    """Parsed form of ``tag[#id][.class]*``."""

    tag: str
    id: str | None = None
    classes: tuple[str, ...] = ()

    @classmethod
    def parse(cls, descriptor: str) -> TagDescriptor:
        """Parse a descriptor string.

        Examples:
            >>> TagDescriptor.parse("div#main.a.b")
            TagDescriptor(tag='div', id='main', classes=('a', 'b'))
        """
        tag_with_id, *classes = descriptor.split(".")
        tag, _, id_ = tag_with_id.partition("#")
        if not tag:
            raise ValueError(f"Tag descriptor has no tag name: {descriptor!r}")

        parsed = cls(tag=tag, id=id_ or None, classes=tuple(c for c in classes if c))
        log.debug("Parsed descriptor %r -> %s", descriptor, parsed)
        return parsed


def attribute_name(keyword: str) -> str:
    """Map a Python keyword argument to an HTML attribute name.

    ``class_`` -> ``class``, ``data_id`` -> ``data-id``.
    """
    if keyword.endswith("_"):
        keyword = keyword[:-1]
    return keyword.replace("_", "-")


def _is_content(value: Any) -> bool:
    if isinstance(value, (str, date, list, tuple)):
        return True
    return callable(value) or hasattr(value, "__html__")


def _resolve_nested(value: Any, context: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _resolve_nested(val, context) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_resolve_nested(val, context) for val in value]
    return value(context) if callable(value) else value


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return format_temporal(value)
    if isinstance(value, Decimal):
        return format_number(value)
    if isinstance(value, Set):
        return list(value)
    return str(value)


def resolve_attribute(value: Any, context: Any) -> Any:
    """Resolve a non-class attribute value against ``context``.

    Callables are invoked; mappings and sequences have their nested callables
    invoked and are serialized as compact JSON.
    """
    if callable(value):
        value = value(context)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(
            _resolve_nested(value, context), separators=(",", ":"), default=_json_default
        )
    return value


def _attribute_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    if isinstance(value, date):
        return format_temporal(value)
    return str(value)


def render_class(fixed: tuple[str, ...], value: Any, context: Any) -> str:
    """Collect class tokens: fixed classes first, then the computed ones.

    Args:
        fixed: Classes from the tag descriptor
        value: The ``class`` attribute - a string, a callable, a mapping of
            class name to toggle (bool or callable), or a sequence of names.
            Scalars returned by a callable are appended as text
        context: Context for callables

    Returns:
        Space-joined class list, "" when there is nothing to render
    """
    classes = list(fixed)

    if callable(value):
        value = value(context)
        if value is not None and not isinstance(value, (str, Mapping, list, tuple, Set)):
            value = _attribute_text(value)

    if isinstance(value, str):
        # an empty string contributes no token
        if value:
            classes.append(value)
    elif isinstance(value, Mapping):
        for name, toggle in value.items():
            if callable(toggle):
                toggle = toggle(context)
            if toggle:
                classes.append(str(name))
    elif isinstance(value, (list, tuple, Set)):
        for name in value:
            if callable(name):
                name = name(context)
            if name:
                classes.append(str(name))

    return " ".join(classes)


class Element(Node):
    """A markup element: tag, ordered attributes and ordered content."""

    def __init__(
        self,
        descriptor: TagDescriptor,
        attrs: Mapping[str, Any],
        content: tuple[Any, ...] = (),
    ):
        self.descriptor = descriptor
        self.attrs = dict(attrs)
        self.content = tuple(content)

    @property
    def tag(self) -> str:
        return self.descriptor.tag

    @property
    def name(self) -> str:
        return f"<{self.tag}>"

    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        rendered = [
            attr
            for attr in (
                self._render_attribute(name, value, context, escaped)
                for name, value in self.attrs.items()
            )
            if attr is not None
        ]
        attrs = " ".join(rendered)

        buffer.append(f"<{self.tag}{' ' if attrs else ''}{attrs}>")
        for entity in self.content:
            render(entity, context, buffer, escaped)
        buffer.append(f"</{self.tag}>")

    def _render_attribute(
        self, name: str, value: Any, context: Any, escaped: bool
    ) -> str | None:
        if name == "class":
            resolved = render_class(self.descriptor.classes, value, context) or None
        else:
            resolved = resolve_attribute(value, context)

        if name in BOOLEAN_ATTRIBUTES:
            return name if resolved else None
        if resolved is None:
            return None

        if hasattr(resolved, "__html__"):
            text = resolved.__html__()
        else:
            text = _attribute_text(resolved)
            if not escaped:
                text = escape(text)
        return f'{name}="{text}"'

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, attrs={list(self.attrs)}, content={len(self.content)})"


def element(descriptor: str, *args: Any, **attrs: Any) -> Element:
    """Build an element from a descriptor, positional arguments and keyword attributes.

    Positional arguments are classified in order:
    - None / False are skipped
    - strings, callables (including other elements), dates, lists and tuples
      become content
    - mappings are merged into the attributes, later keys overwriting earlier ones

    Keyword attributes are merged last (``class_=`` -> ``class``,
    ``data_id=`` -> ``data-id``).

    Args:
        descriptor: ``tag[#id][.class]*``
        *args: Attribute mappings and content, in any order
        **attrs: Extra attributes

    Returns:
        Element node

    Raises:
        ArgumentTypeError: If an argument is neither content nor a mapping
        ValueError: If the descriptor has no tag name

    Examples:
        element("a.nav", {"href": "/"}, "Home")
        element("input", type="checkbox", checked=get_path("done"))
    """
    parsed = TagDescriptor.parse(descriptor)
    merged: dict[str, Any] = {}
    content: list[Any] = []

    if parsed.id:
        merged["id"] = parsed.id

    for arg in args:
        if arg is None or arg is False:
            continue
        if isinstance(arg, Mapping):
            merged.update(arg)
        elif _is_content(arg):
            content.append(arg)
        else:
            raise ArgumentTypeError(type(arg).__name__)

    merged.update({attribute_name(key): value for key, value in attrs.items()})

    if "class" not in merged and parsed.classes:
        merged["class"] = ""

    return Element(parsed, merged, tuple(content))
