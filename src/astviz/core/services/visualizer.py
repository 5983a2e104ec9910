from __future__ import annotations

"""
Visualizer Service.

Public entry points composing the renderer and the statistics aggregator.
Every function accepts a Node or a native value; printing functions write
the fully assembled text to the sink in a single call.
"""

import logging
import sys
from typing import Any, Optional, TextIO

from astviz.core.analysis.classifier import DEFAULT_POLICY, ExpansionPolicy
from astviz.core.analysis.stats import analyze, format_report, format_summary
from astviz.core.analysis.tree_renderer import render, render_colored
from astviz.domain.nodes import as_node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def tree_to_string(value: Any, *, policy: ExpansionPolicy = DEFAULT_POLICY) -> str:
    """
    Return the tree visualization without writing it anywhere.

    Args:
        value: Root node or native value.
        policy: Expansion rule for listed children.

    Returns:
        str: Header line, newline, then the box-drawn body.
    """
    return render(value, policy=policy)


def print_tree(
        value: Any,
        *,
        sink: Optional[TextIO] = None,
        policy: ExpansionPolicy = DEFAULT_POLICY,
) -> None:
    """
    Write the tree visualization followed by a newline.

    A leaf or empty root renders as its header and a newline, so the
    output ends with a blank line there.
    """
    _emit(render(value, policy=policy), sink)


def print_tree_colored(
        value: Any,
        *,
        sink: Optional[TextIO] = None,
        policy: ExpansionPolicy = DEFAULT_POLICY,
) -> None:
    """Write the ANSI-colored tree visualization."""
    _emit(render_colored(value, policy=policy), sink)


def analyze_and_print(
        value: Any,
        *,
        sink: Optional[TextIO] = None,
        policy: ExpansionPolicy = DEFAULT_POLICY,
        style: str = "compact",
) -> None:
    """
    Write the statistics of a tree, then the tree itself.

    Args:
        value: Root node or native value.
        sink: Output stream (stdout by default).
        policy: Expansion rule for listed children.
        style: "compact" for the one-line summary, "detailed" for the
            framed report.

    Raises:
        ValueError: On an unknown style.
    """
    node = as_node(value)
    stats = analyze(node)

    if style == "compact":
        text = format_summary(stats)
    elif style == "detailed":
        text = format_report(stats)
    else:
        raise ValueError(f"Unknown statistics style: {style!r}")

    logger.debug(f"Analyzed tree: {stats}")
    _emit(text, sink)
    print_tree(node, sink=sink, policy=policy)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _emit(text: str, sink: Optional[TextIO]) -> None:
    out = sink if sink is not None else sys.stdout
    out.write(text + "\n")
