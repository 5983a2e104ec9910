from __future__ import annotations

"""
Node Classifier.

Answers the three questions the traversals ask about a single node:
its structural kind, whether it deserves its own subtree when listed as
a child, and which semantic category it falls into for statistics.
"""

from enum import Enum
from typing import Tuple

from astviz.domain.errors import UnclassifiableNode
from astviz.domain.nodes import (
    FixedComposite,
    Leaf,
    LeafTag,
    Node,
    VariableComposite,
)

# -----------------------------------------------------------------------------
# CLASSIFICATION ENUMS
# -----------------------------------------------------------------------------

class StructuralKind(str, Enum):
    FIXED_COMPOSITE = "fixed_composite"
    VARIABLE_COMPOSITE = "variable_composite"
    LEAF = "leaf"


class SemanticCategory(str, Enum):
    FUNCTION_CALL = "function_call"
    VARIABLE = "variable"
    STRUCTURAL = "structural"
    LITERAL = "literal"


class ExpansionPolicy(str, Enum):
    """
    Rules deciding whether a child composite gets its own subtree.

    SELECTIVE: non-empty and holding at least one non-empty composite child.
    NONEMPTY: any non-empty composite.
    ANY_COMPOSITE: non-empty and holding at least one composite child,
        empty ones included.
    """
    SELECTIVE = "selective"
    NONEMPTY = "nonempty"
    ANY_COMPOSITE = "any-composite"


DEFAULT_POLICY = ExpansionPolicy.SELECTIVE

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def structural_kind(node: Node) -> StructuralKind:
    """
    Determine the shape variant of a node.

    Raises:
        UnclassifiableNode: If node is not one of the three variants.
    """
    if isinstance(node, FixedComposite):
        return StructuralKind.FIXED_COMPOSITE
    if isinstance(node, VariableComposite):
        return StructuralKind.VARIABLE_COMPOSITE
    if isinstance(node, Leaf):
        return StructuralKind.LEAF
    raise UnclassifiableNode(node)


def children_of(node: Node) -> Tuple[Node, ...]:
    """Ordered children of a composite; a leaf has none."""
    if structural_kind(node) is StructuralKind.LEAF:
        return ()
    return node.children


def is_composite(node: Node) -> bool:
    return structural_kind(node) is not StructuralKind.LEAF


def is_expandable(node: Node, policy: ExpansionPolicy = DEFAULT_POLICY) -> bool:
    """
    Decide whether a child node is printed with its own nested subtree.

    Leaves never expand. Empty composites never expand.

    Args:
        node: Child being listed by its parent.
        policy: Expansion rule to apply.

    Returns:
        bool: True if the node's children must be listed below it.
    """
    if not is_composite(node) or not node.children:
        return False

    if policy is ExpansionPolicy.NONEMPTY:
        return True
    if policy is ExpansionPolicy.ANY_COMPOSITE:
        return any(is_composite(child) for child in node.children)
    return any(_is_complex(child) for child in node.children)


def semantic_category(node: Node) -> SemanticCategory:
    """
    Classify a node for statistics.

    Function calls are checked before variables since both are
    three-element tuples headed by an atom.
    """
    kind = structural_kind(node)
    if kind is StructuralKind.LEAF:
        return SemanticCategory.LITERAL

    if kind is StructuralKind.FIXED_COMPOSITE and len(node.children) == 3:
        head, _meta, tail = node.children
        if _is_atom(head):
            if isinstance(tail, VariableComposite):
                return SemanticCategory.FUNCTION_CALL
            if _is_atom(tail):
                return SemanticCategory.VARIABLE

    return SemanticCategory.STRUCTURAL


def call_arguments(node: Node) -> Tuple[Node, ...]:
    """
    Argument list of a function-call node.

    Raises:
        ValueError: If the node is not a function call.
    """
    if semantic_category(node) is not SemanticCategory.FUNCTION_CALL:
        raise ValueError("Node is not a function call")
    return node.children[2].children

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_complex(node: Node) -> bool:
    """Non-empty composite."""
    return is_composite(node) and len(node.children) > 0


def _is_atom(node: Node) -> bool:
    return isinstance(node, Leaf) and node.tag is LeafTag.ATOM
