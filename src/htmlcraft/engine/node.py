"""Base Node class - the deferred renderable.

A Node is what every builder and combinator returns:
- It is evaluated lazily, against whatever context it is called with
- Calling it without a buffer starts a top-level render and returns the HTML
- Calling it with a buffer appends into that buffer and returns ""
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

log = logging.getLogger(__name__)


class Node(ABC):
    """Base class for deferred renderables."""

    @abstractmethod
    def write(self, context: Any, buffer: list[str], escaped: bool) -> None:
        """Append this node's output to ``buffer``.

        Args:
            context: Context the node is evaluated against
            buffer: Shared output buffer owned by the top-level call
            escaped: If True, text is written as-is instead of being escaped
        """
        pass

    def __call__(
        self,
        context: Any = None,
        buffer: list[str] | None = None,
        escaped: bool = False,
    ) -> str:
        """Render the node.

        Args:
            context: Context object, ``None`` means an empty mapping
            buffer: Caller's buffer for nested calls; omit for a top-level render
            escaped: Disable escaping for everything below this node

        Returns:
            The rendered HTML for a top-level call, "" for a nested one
        """
        if context is None:
            context = {}

        if buffer is not None:
            self.write(context, buffer, escaped)
            return ""

        out: list[str] = []
        self.write(context, out, escaped)
        html = "".join(out)
        log.debug("Rendered %s: %d fragments, %d chars", self.name, len(out), len(html))
        return html

    @property
    def name(self) -> str:
        """Node name for debugging."""
        return self.__class__.__name__
