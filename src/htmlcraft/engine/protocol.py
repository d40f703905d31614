"""Renderable protocol - flattens any renderable value into the output buffer.

Each kind of renderable has its own registered handler:

- None, False, "" and True write nothing
- str is escaped unless ``escaped`` is set; objects with ``__html__`` are already safe
- numbers are written in canonical decimal form, never escaped
- datetimes and dates are written as ISO-8601, never escaped
- Nodes write straight into the shared buffer
- other callables are invoked with the context and their result rendered
- lists, tuples and other non-mapping iterables render item by item

Anything else raises RenderTypeError.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from functools import singledispatch
from typing import Any

from htmlcraft.engine.node import Node
from htmlcraft.escape import escape
from htmlcraft.exceptions import RenderTypeError


def format_number(value: int | float | Decimal) -> str:
    """Canonical decimal form: integral floats drop their ``.0``."""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_temporal(value: date) -> str:
    """ISO-8601 timestamp; datetimes are normalized to UTC with millisecond precision."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="milliseconds") + "Z"
    return value.isoformat()


@singledispatch
def render(entity: Any, context: Any, buffer: list[str], escaped: bool = False) -> None:
    """Render ``entity`` against ``context``, appending text to ``buffer``.

    Args:
        entity: Any renderable value
        context: Context passed to deferred renderables
        buffer: Output buffer, shared by the whole render
        escaped: If True, strings are written without escaping

    Raises:
        RenderTypeError: If ``entity`` is a mapping, bytes or a non-iterable object
    """
    if hasattr(entity, "__html__"):
        buffer.append(entity.__html__())
    elif callable(entity):
        render(entity(context), context, buffer, escaped)
    elif isinstance(entity, Iterable) and not isinstance(entity, Mapping):
        for item in entity:
            render(item, context, buffer, escaped)
    else:
        raise RenderTypeError(type(entity).__name__)


@render.register(type(None))
def _render_none(entity: None, context: Any, buffer: list[str], escaped: bool = False) -> None:
    pass


@render.register(bool)
def _render_bool(entity: bool, context: Any, buffer: list[str], escaped: bool = False) -> None:
    # a bare boolean is never content
    pass


@render.register(str)
def _render_str(entity: str, context: Any, buffer: list[str], escaped: bool = False) -> None:
    if not entity:
        return
    if hasattr(entity, "__html__"):
        buffer.append(entity.__html__())
    else:
        buffer.append(entity if escaped else escape(entity))


@render.register(int)
@render.register(float)
@render.register(Decimal)
def _render_number(entity: Any, context: Any, buffer: list[str], escaped: bool = False) -> None:
    buffer.append(format_number(entity))


@render.register(date)
def _render_temporal(entity: date, context: Any, buffer: list[str], escaped: bool = False) -> None:
    buffer.append(format_temporal(entity))


@render.register(Node)
def _render_node(entity: Node, context: Any, buffer: list[str], escaped: bool = False) -> None:
    entity.write(context, buffer, escaped)


@render.register(list)
@render.register(tuple)
def _render_sequence(entity: Any, context: Any, buffer: list[str], escaped: bool = False) -> None:
    for item in entity:
        render(item, context, buffer, escaped)


@render.register(Mapping)
@render.register(bytes)
@render.register(bytearray)
def _render_unsupported(entity: Any, context: Any, buffer: list[str], escaped: bool = False) -> None:
    raise RenderTypeError(type(entity).__name__)


def render_to_string(entity: Any, context: Any = None, escaped: bool = False) -> str:
    """Top-level render of any renderable value.

    Same as calling a Node without a buffer, but also accepts plain strings,
    functions of context and sequences.
    """
    if context is None:
        context = {}
    buffer: list[str] = []
    render(entity, context, buffer, escaped)
    return "".join(buffer)
