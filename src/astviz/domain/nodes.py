from __future__ import annotations

"""
Syntax Tree Node Models.

Provides the closed set of node variants consumed by the classifier,
renderer and statistics aggregator, plus the adapter that maps native
Python values (tuples, lists, scalars) onto that model.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Set, Tuple, Union

from astviz.domain.errors import CyclicStructure, UnclassifiableNode

# -----------------------------------------------------------------------------
# LEAF TAGS
# -----------------------------------------------------------------------------

class LeafTag(str, Enum):
    """Scalar families distinguished for inline display and coloring."""
    ATOM = "atom"
    STRING = "string"
    NUMBER = "number"
    OTHER = "other"


@dataclass(frozen=True)
class Atom:
    """
    Native representation of an atom (symbol).

    Attributes:
        name: Atom text without the leading colon (e.g. "+", "x", "nil").
    """
    name: str

    def __str__(self) -> str:
        return self.name


NIL = Atom("nil")
TRUE = Atom("true")
FALSE = Atom("false")

# -----------------------------------------------------------------------------
# NODE VARIANTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """
    Irreducible value of the tree.

    Attributes:
        value: Raw scalar (Atom, str, number, bytes, dict...).
        tag: Family of the scalar.
    """
    value: Any
    tag: LeafTag

    @classmethod
    def atom(cls, name: str) -> "Leaf":
        return cls(Atom(name), LeafTag.ATOM)

    @classmethod
    def string(cls, text: str) -> "Leaf":
        return cls(text, LeafTag.STRING)

    @classmethod
    def number(cls, value: Any) -> "Leaf":
        return cls(value, LeafTag.NUMBER)


@dataclass(frozen=True)
class FixedComposite:
    """Fixed-arity ordered sequence of nodes (a tuple)."""
    children: Tuple["Node", ...] = ()

    @classmethod
    def of(cls, *children: "Node") -> "FixedComposite":
        return cls(tuple(children))


@dataclass(frozen=True)
class VariableComposite:
    """Variable-length ordered sequence of nodes (a list)."""
    children: Tuple["Node", ...] = ()

    @classmethod
    def of(cls, *children: "Node") -> "VariableComposite":
        return cls(tuple(children))


Node = Union[Leaf, FixedComposite, VariableComposite]
NODE_TYPES = (Leaf, FixedComposite, VariableComposite)

# -----------------------------------------------------------------------------
# NATIVE VALUE ADAPTER
# -----------------------------------------------------------------------------

def is_node(value: Any) -> bool:
    return isinstance(value, NODE_TYPES)


def as_node(value: Any) -> Node:
    """
    Return value unchanged if it already is a Node, otherwise convert it.

    Args:
        value: Node instance or native Python value.

    Returns:
        Node: The node model of the value.
    """
    if is_node(value):
        return value
    return to_node(value)


def to_node(value: Any) -> Node:
    """
    Convert a native Python value into the node model.

    Tuples become fixed composites, lists become variable composites and
    scalars become tagged leaves. Containers that contain themselves are
    rejected.

    Args:
        value: Native value to convert.

    Returns:
        Node: Converted tree.

    Raises:
        UnclassifiableNode: If a value has no node counterpart.
        CyclicStructure: If a container is reachable from itself.
    """
    return _convert(value, set())


def leaf_for(value: Any) -> Leaf:
    """
    Build the tagged leaf for a scalar value.

    Raises:
        UnclassifiableNode: If the value is not a supported scalar.
    """
    if isinstance(value, Atom):
        return Leaf(value, LeafTag.ATOM)
    if value is None:
        return Leaf(NIL, LeafTag.ATOM)
    # bool must be tested before numbers: it is an int subclass
    if isinstance(value, bool):
        return Leaf(TRUE if value else FALSE, LeafTag.ATOM)
    if isinstance(value, str):
        return Leaf(value, LeafTag.STRING)
    if isinstance(value, numbers.Real):
        return Leaf(value, LeafTag.NUMBER)
    if isinstance(value, (bytes, bytearray, dict, complex)):
        return Leaf(value, LeafTag.OTHER)
    raise UnclassifiableNode(value)


def _convert(value: Any, active: Set[int]) -> Node:
    if is_node(value):
        return value

    if isinstance(value, (tuple, list)):
        marker = id(value)
        if marker in active:
            raise CyclicStructure(value)
        active.add(marker)
        try:
            children = tuple(_convert(item, active) for item in value)
        finally:
            active.discard(marker)
        if isinstance(value, tuple):
            return FixedComposite(children)
        return VariableComposite(children)

    if isinstance(value, dict):
        _check_mapping(value, active)

    return leaf_for(value)


def _check_mapping(value: dict, active: Set[int]) -> None:
    """Validate that every key and value of a map leaf is convertible."""
    marker = id(value)
    if marker in active:
        raise CyclicStructure(value)
    active.add(marker)
    try:
        for k, v in value.items():
            _convert(k, active)
            _convert(v, active)
    finally:
        active.discard(marker)
