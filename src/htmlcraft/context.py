"""Render contexts.

A context is any read-only mapping handed to deferred renderables. The caller
supplies the top-level one (usually a plain dict). Iteration and scope-shift
combinators derive new contexts as ``Scope`` objects layered over the outer
context:

- ``$parent`` is the immediate outer context
- ``$root`` is the outermost context, fixed at the first derived scope
- ``parent`` is an ordinary value (``each`` sets it), falling back to ``$parent``

Scopes never change after construction.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

PARENT_KEY = "$parent"
ROOT_KEY = "$root"


def root_of(context: Any) -> Any:
    """Return the outermost context that ``context`` descends from."""
    if isinstance(context, Scope):
        return context.root
    if isinstance(context, Mapping):
        root = context.get(ROOT_KEY)
        if root is not None:
            return root
    return context


class Scope(Mapping[str, Any]):
    """Immutable derived context.

    Iterating a scope yields only its own values; ``$parent`` and ``$root``
    are reachable by lookup but cannot be shadowed or enumerated.
    """

    __slots__ = ("_values", "_parent", "_root")

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        parent: Any,
        root: Any,
    ):
        object.__setattr__(self, "_values", MappingProxyType(dict(values or {})))
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_root", root)

    @classmethod
    def derive(cls, outer: Any, values: Mapping[str, Any] | None = None) -> Scope:
        """Create a scope nested in ``outer``, inheriting its root."""
        return cls(values, parent=outer, root=root_of(outer))

    @property
    def parent(self) -> Any:
        return self._parent

    @property
    def root(self) -> Any:
        return self._root

    @property
    def values_map(self) -> Mapping[str, Any]:
        """Read-only view of the scope's own values."""
        return self._values

    def __getitem__(self, key: str) -> Any:
        if key == ROOT_KEY:
            return self._root
        if key == PARENT_KEY:
            return self._parent
        if key in self._values:
            return self._values[key]
        if key == "parent":
            return self._parent
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Scope({dict(self._values)!r})"
