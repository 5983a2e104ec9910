from __future__ import annotations

from .core.analysis.classifier import (
    ExpansionPolicy,
    SemanticCategory,
    StructuralKind,
    is_expandable,
    semantic_category,
    structural_kind,
)
from .core.analysis.colorize import colorize
from .core.analysis.inline import inline
from .core.analysis.stats import analyze, format_report, format_summary
from .core.analysis.tree_renderer import render, render_colored
from .core.services.visualizer import (
    analyze_and_print,
    print_tree,
    print_tree_colored,
    tree_to_string,
)
from .domain.errors import (
    AstVizError,
    CyclicStructure,
    InvalidTreeDocument,
    QuoteError,
    UnclassifiableNode,
)
from .domain.nodes import (
    Atom,
    FixedComposite,
    Leaf,
    LeafTag,
    Node,
    VariableComposite,
    as_node,
    to_node,
)
from .domain.stats_models import StatsRecord

__version__ = "1.0.0"

__all__ = [
    "Atom",
    "AstVizError",
    "CyclicStructure",
    "ExpansionPolicy",
    "FixedComposite",
    "InvalidTreeDocument",
    "Leaf",
    "LeafTag",
    "Node",
    "QuoteError",
    "SemanticCategory",
    "StatsRecord",
    "StructuralKind",
    "UnclassifiableNode",
    "VariableComposite",
    "analyze",
    "analyze_and_print",
    "as_node",
    "colorize",
    "format_report",
    "format_summary",
    "inline",
    "is_expandable",
    "print_tree",
    "print_tree_colored",
    "render",
    "render_colored",
    "semantic_category",
    "structural_kind",
    "to_node",
    "tree_to_string",
]
