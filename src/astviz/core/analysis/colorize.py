from __future__ import annotations

"""
Leaf Colorizer.

Wraps atom, string and number leaves in ANSI escape pairs for the colored
tree variant. Everything else, composites included, falls back to the
plain inline form.
"""

from typing import Any, Optional

from astviz.core.analysis.inline import format_number, inline
from astviz.domain.constants import ANSI_RESET, LEAF_COLORS
from astviz.domain.nodes import Leaf, LeafTag, as_node


def color_for(tag: LeafTag) -> Optional[str]:
    """Escape sequence opening the color of a leaf tag, if it has one."""
    return LEAF_COLORS.get(tag)


def colorize(value: Any) -> str:
    """
    Colored single-line form of a node.

    Args:
        value: Node or native value.

    Returns:
        str: ANSI-wrapped text for atom/string/number leaves, inline text otherwise.
    """
    node = as_node(value)
    if not isinstance(node, Leaf):
        return inline(node)

    color = color_for(node.tag)
    if color is None:
        return inline(node)

    if node.tag is LeafTag.ATOM:
        text = f":{node.value.name}"
    elif node.tag is LeafTag.STRING:
        text = f"\"{node.value}\""
    else:
        text = format_number(node.value)
    return f"{color}{text}{ANSI_RESET}"
