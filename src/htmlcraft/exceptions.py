"""htmlcraft Exceptions

Custom exceptions raised by the rendering engine, loader and config layer.
"""

from __future__ import annotations


class HtmlcraftError(Exception):
    """Base exception for all htmlcraft errors."""

    pass


class ArgumentTypeError(HtmlcraftError, TypeError):
    """Raised when the element builder receives an argument it cannot classify."""

    def __init__(self, value_type: str, message: str | None = None):
        self.value_type = value_type
        super().__init__(message or f"Unsupported parameter of type {value_type}")


class RenderTypeError(HtmlcraftError, TypeError):
    """Raised when a value that is neither renderable nor iterable reaches the renderer."""

    def __init__(self, value_type: str, message: str | None = None):
        self.value_type = value_type
        super().__init__(message or f"Cannot render value of type {value_type}")


class LoaderError(HtmlcraftError):
    """Raised when a 'module:attribute' reference cannot be resolved."""

    def __init__(self, ref: str, reason: str):
        self.ref = ref
        super().__init__(f"Cannot load {ref!r}: {reason}")


class ConfigError(HtmlcraftError):
    """Raised when the project file is invalid or names an unknown target."""

    pass
