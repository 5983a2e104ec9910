from __future__ import annotations

"""
Tree Renderer.

Converts a node tree into its box-drawn text form: the inline header line
followed by one line per listed child. Children selected by the expansion
policy get their own nested listing, indented with the continuation
glyphs of their ancestors.
"""

import logging
from typing import Any, Callable, List

from astviz.core.analysis.classifier import (
    DEFAULT_POLICY,
    ExpansionPolicy,
    children_of,
    is_composite,
    is_expandable,
)
from astviz.core.analysis.colorize import colorize
from astviz.core.analysis.inline import inline
from astviz.domain.constants import BRANCH, LAST_BRANCH, PIPE_INDENT, SPACE_INDENT
from astviz.domain.nodes import Node, as_node

logger = logging.getLogger(__name__)

Formatter = Callable[[Node], str]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render(
        value: Any,
        *,
        policy: ExpansionPolicy = DEFAULT_POLICY,
        formatter: Formatter = inline,
) -> str:
    """
    Render a tree as a header line followed by its box-drawn body.

    A leaf or an empty composite has an empty body, so the result is the
    header followed by a single newline.

    Args:
        value: Root node or native value.
        policy: Expansion rule for listed children.
        formatter: Single-line formatter applied to every displayed node.

    Returns:
        str: The newline-joined visualization.
    """
    node = as_node(value)
    header = formatter(node)
    body = ""
    if is_composite(node):
        body = render_body(node, policy=policy, formatter=formatter)
        logger.debug(f"Rendered {len(node.children)} top-level children using '{policy.value}' policy")
    return f"{header}\n{body}"


def render_colored(value: Any, *, policy: ExpansionPolicy = DEFAULT_POLICY) -> str:
    """Render with atom, string and number leaves colorized."""
    return render(value, policy=policy, formatter=colorize)


def render_body(
        node: Node,
        prefix: str = "",
        *,
        policy: ExpansionPolicy = DEFAULT_POLICY,
        formatter: Formatter = inline,
) -> str:
    """
    Render the listing of a node's children below the given prefix.

    Args:
        node: Node whose children are listed.
        prefix: Indentation accumulated from the ancestors.
        policy: Expansion rule for listed children.
        formatter: Single-line formatter.

    Returns:
        str: Newline-joined lines without a trailing separator.
    """
    if not is_composite(node):
        return f"{prefix}{formatter(node)}"

    lines: List[str] = []
    _render_children(node, lines, prefix, policy, formatter)
    return "\n".join(lines)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        node: Node,
        lines: List[str],
        prefix: str,
        policy: ExpansionPolicy,
        formatter: Formatter,
) -> None:
    children = children_of(node)
    total = len(children)

    for i, child in enumerate(children):
        is_last = (i == total - 1)
        connector = LAST_BRANCH if is_last else BRANCH

        lines.append(f"{prefix}{connector}{formatter(child)}")

        if is_expandable(child, policy):
            child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
            _render_children(child, lines, child_prefix, policy, formatter)
