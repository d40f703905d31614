"""Context accessors used by combinators and attribute values.

Supports dotted paths like ``entry.val`` or ``$root.site.title``:
- mapping keys are looked up first
- integer segments index into lists/tuples
- attributes are used as a last resort
Any missing step makes the whole lookup return ``None``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence, Set
from typing import Any

Getter = Callable[[Any], Any]

_MISSING = object()


def _step(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, _MISSING)
    if isinstance(value, Sequence) and not isinstance(value, str):
        try:
            return value[int(segment)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(value, segment, _MISSING)


def resolve_path(context: Any, path: str) -> Any:
    """Look up a dotted ``path`` in ``context``, returning ``None`` if any step is missing."""
    if not path:
        return context

    value = context
    for segment in path.split("."):
        if value is None:
            return None
        value = _step(value, segment)
        if value is _MISSING:
            return None
    return value


def get_path(path: str) -> Getter:
    """Create a getter for a dotted path.

    Example:
        >>> get_path("entry.val")({"entry": {"val": 1}})
        1
    """

    def getter(context: Any) -> Any:
        return resolve_path(context, path)

    getter.__name__ = f"get_path({path!r})"
    return getter


def ensure_fn(value: Any) -> Getter:
    """Turn ``value`` into a function of context.

    Callables are returned as-is, strings become path getters and anything
    else becomes a constant.
    """
    if callable(value):
        return value
    if isinstance(value, str):
        return get_path(value)
    return lambda context: value


def _matches(expected: Any, actual: Any) -> bool:
    if callable(expected):
        return bool(expected(actual))
    if isinstance(expected, Mapping):
        return all(_matches(val, resolve_path(actual, key)) for key, val in expected.items())
    if isinstance(expected, (list, tuple, Set)):
        return actual in expected
    return expected == actual


def when(matcher: Mapping[str, Any]) -> Callable[[Any], bool]:
    """Build a predicate of context from a declarative matcher.

    Every key is a dotted path into the context. Values are matched as:
    - callable: called with the resolved value, truthiness decides
    - mapping: matched recursively against the resolved value
    - list/tuple/set: the resolved value must be a member
    - anything else: equality

    All keys must match; an empty matcher always matches.

    Example:
        >>> when({"user.role": ["admin", "owner"]})({"user": {"role": "admin"}})
        True
    """
    expected = dict(matcher)

    def predicate(context: Any) -> bool:
        return _matches(expected, context)

    return predicate
