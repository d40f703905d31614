"""htmlcraft.engine - the renderable protocol, elements and combinators."""

from htmlcraft.engine.node import Node
from htmlcraft.engine.protocol import render, render_to_string
from htmlcraft.engine.element import Element, TagDescriptor, element
from htmlcraft.engine.combinators import each, group, if_, safe, within

__all__ = [
    "Node",
    "render",
    "render_to_string",
    "Element",
    "TagDescriptor",
    "element",
    "each",
    "within",
    "group",
    "safe",
    "if_",
]
