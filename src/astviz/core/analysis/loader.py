from __future__ import annotations

"""
JSON Tree Codec.

Reads and writes trees as JSON documents. Arrays encode lists,
`{"tuple": [...]}` encodes tuples, `{"atom": "name"}` encodes atoms,
strings and numbers map to themselves, and `null`/`true`/`false` map to
the atoms `nil`/`true`/`false`.
"""

import json
import logging
import os
from typing import Any

from astviz.domain.errors import InvalidTreeDocument
from astviz.domain.nodes import (
    FALSE,
    NIL,
    TRUE,
    Atom,
    FixedComposite,
    Leaf,
    LeafTag,
    Node,
    VariableComposite,
)

logger = logging.getLogger(__name__)

TUPLE_KEY = "tuple"
ATOM_KEY = "atom"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_tree(path: str) -> Node:
    """
    Read a tree document from disk.

    Args:
        path: Path of the JSON document.

    Returns:
        Node: Decoded tree.

    Raises:
        InvalidTreeDocument: If the file is unreadable or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidTreeDocument(f"Could not read '{os.path.basename(path)}': {e}") from e

    logger.debug(f"Loaded tree document from {path} ({len(text)} chars)")
    return loads_tree(text)


def loads_tree(text: str) -> Node:
    """Decode a tree from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidTreeDocument(f"Invalid JSON: {e.msg} (line {e.lineno})") from e
    return node_from_json(data)


def node_from_json(data: Any) -> Node:
    """
    Decode an already-parsed JSON value.

    Raises:
        InvalidTreeDocument: On objects that are neither tuples nor atoms.
    """
    if isinstance(data, list):
        return VariableComposite(tuple(node_from_json(item) for item in data))

    if isinstance(data, dict):
        if set(data) == {TUPLE_KEY} and isinstance(data[TUPLE_KEY], list):
            return FixedComposite(tuple(node_from_json(item) for item in data[TUPLE_KEY]))
        if set(data) == {ATOM_KEY} and isinstance(data[ATOM_KEY], str):
            return Leaf(Atom(data[ATOM_KEY]), LeafTag.ATOM)
        raise InvalidTreeDocument(
            f"Unsupported object with keys {sorted(data)}: "
            f"expected {{\"{TUPLE_KEY}\": [...]}} or {{\"{ATOM_KEY}\": \"...\"}}"
        )

    if data is None:
        return Leaf(NIL, LeafTag.ATOM)
    if isinstance(data, bool):
        return Leaf(TRUE if data else FALSE, LeafTag.ATOM)
    if isinstance(data, str):
        return Leaf(data, LeafTag.STRING)
    if isinstance(data, (int, float)):
        return Leaf(data, LeafTag.NUMBER)

    raise InvalidTreeDocument(f"Unsupported JSON value of type {type(data).__name__}")


def node_to_json(node: Node) -> Any:
    """
    Encode a tree as JSON-compatible data.

    Raises:
        InvalidTreeDocument: For leaves with no JSON encoding (bytes, maps...).
    """
    if isinstance(node, FixedComposite):
        return {TUPLE_KEY: [node_to_json(child) for child in node.children]}
    if isinstance(node, VariableComposite):
        return [node_to_json(child) for child in node.children]

    if node.tag is LeafTag.ATOM:
        return {ATOM_KEY: node.value.name}
    if node.tag in (LeafTag.STRING, LeafTag.NUMBER) and isinstance(node.value, (str, int, float)):
        return node.value
    raise InvalidTreeDocument(f"Leaf {node.value!r} has no JSON encoding")


def dumps_tree(node: Node, indent: int = 2) -> str:
    return json.dumps(node_to_json(node), ensure_ascii=False, indent=indent)
