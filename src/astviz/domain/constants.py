from __future__ import annotations

"""
Domain Constants and Static Lookup Tables.

Centralizes the box-drawing glyphs, the ANSI palette keyed by leaf tag,
the report labels and application versioning.
"""

from types import MappingProxyType
from typing import Mapping

from astviz.domain.nodes import LeafTag

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# BOX DRAWING
# -----------------------------------------------------------------------------
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "

# -----------------------------------------------------------------------------
# ANSI PALETTE
# -----------------------------------------------------------------------------
ANSI_RESET = "\x1b[0m"
ANSI_BLUE = "\x1b[34m"
ANSI_GREEN = "\x1b[32m"
ANSI_CYAN = "\x1b[36m"

LEAF_COLORS: Mapping[LeafTag, str] = MappingProxyType({
    LeafTag.ATOM: ANSI_BLUE,
    LeafTag.STRING: ANSI_GREEN,
    LeafTag.NUMBER: ANSI_CYAN,
})

# -----------------------------------------------------------------------------
# STATISTICS REPORT
# -----------------------------------------------------------------------------
REPORT_HEADER = "=== AST Analysis ==="
REPORT_FOOTER = "=================="

REPORT_LABELS: Mapping[str, str] = MappingProxyType({
    "total_nodes": "Total nodes",
    "max_depth": "Max depth",
    "function_calls": "Function calls",
    "variables": "Variables",
    "literals": "Literals",
})

STATS_STYLES = ("compact", "detailed")
