from __future__ import annotations

"""
Statistics Aggregator.

Single-pass fold over a tree that counts nodes by semantic category and
tracks the deepest level reached. Function calls only descend into their
argument list and variables are counted without descending at all.
"""

from functools import reduce
from typing import Any, Iterable

from astviz.core.analysis.classifier import (
    SemanticCategory,
    call_arguments,
    children_of,
    semantic_category,
)
from astviz.domain.constants import REPORT_FOOTER, REPORT_HEADER, REPORT_LABELS
from astviz.domain.nodes import Node, as_node
from astviz.domain.stats_models import StatsRecord

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def analyze(value: Any) -> StatsRecord:
    """
    Compute the shape statistics of a tree, root at depth 0.

    Args:
        value: Root node or native value.

    Returns:
        StatsRecord: Merged counts for the whole tree.
    """
    return gather_stats(as_node(value), 0)


def gather_stats(node: Node, depth: int) -> StatsRecord:
    """
    Statistics of the subtree rooted at node, found at the given depth.
    """
    category = semantic_category(node)

    if category is SemanticCategory.LITERAL:
        return StatsRecord(total_nodes=1, max_depth=depth, literals=1)

    if category is SemanticCategory.VARIABLE:
        return StatsRecord(total_nodes=1, max_depth=depth, variables=1)

    if category is SemanticCategory.FUNCTION_CALL:
        merged = _fold(call_arguments(node), depth)
        return merged.bump(total_nodes=1, function_calls=1)

    merged = _fold(children_of(node), depth)
    return merged.bump(total_nodes=1)


def format_summary(stats: StatsRecord) -> str:
    """One-line summary of a statistics record."""
    return (
        f"Nodes: {stats.total_nodes}, Depth: {stats.max_depth}, "
        f"Funcs: {stats.function_calls}, Vars: {stats.variables}, "
        f"Literals: {stats.literals}"
    )


def format_report(stats: StatsRecord) -> str:
    """Framed multi-line report of a statistics record."""
    values = stats.to_dict()
    lines = [REPORT_HEADER]
    lines.extend(f"{label}: {values[field]}" for field, label in REPORT_LABELS.items())
    lines.append(REPORT_FOOTER)
    return "\n".join(lines)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _fold(children: Iterable[Node], depth: int) -> StatsRecord:
    """Merge the records of children found one level below depth."""
    records = (gather_stats(child, depth + 1) for child in children)
    return reduce(StatsRecord.merge, records, StatsRecord.zero(depth))
