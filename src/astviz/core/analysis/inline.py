from __future__ import annotations

"""
Inline Formatter.

Produces the compact single-line form of any node, following the
conventions of Elixir's `inspect`: `:atoms`, quoted strings, `{tuples}`,
`[lists]`, keyword lists and `%{maps}`. Used for the header line and for
every child listed by the renderer.
"""

import math
import re
from decimal import Decimal
from typing import Any

from astviz.domain.nodes import (
    Atom,
    FixedComposite,
    Leaf,
    LeafTag,
    VariableComposite,
    as_node,
)

# -----------------------------------------------------------------------------
# ATOM SYNTAX
# -----------------------------------------------------------------------------
_IDENTIFIER_RX = re.compile(r"^[a-z_][A-Za-z0-9_@]*[?!]?$")
_KEYWORD_KEY_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_@]*[?!]?$")
_ALIAS_RX = re.compile(r"^[A-Z][A-Za-z0-9_]*(\.[A-Z][A-Za-z0-9_]*)*$")

_BARE_ATOMS = frozenset({"nil", "true", "false"})
_ALIAS_PREFIX = "Elixir."

_OPERATOR_ATOMS = frozenset({
    "+", "-", "*", "/", "++", "--", "**", "..", "...", "<>",
    "==", "!=", "===", "!==", "<", ">", "<=", ">=", "=~",
    "&&", "||", "!", "&&&", "|||", "<<<", ">>>", "~~~", "^^^",
    "|>", "<|>", "<~>", "~>", "<~", "->", "<-", "::", "\\\\",
    "=", "|", "&", "@", "^", ".", "%", "{}", "%{}", "<<>>", "[]",
})

_STRING_ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def inline(value: Any) -> str:
    """
    Render a node (or native value) on a single line.

    Args:
        value: Node or native value.

    Returns:
        str: Compact textual representation.
    """
    node = as_node(value)

    if isinstance(node, Leaf):
        return _inline_leaf(node)
    if isinstance(node, FixedComposite):
        return "{" + ", ".join(inline(child) for child in node.children) + "}"
    if isinstance(node, VariableComposite):
        if _is_keyword_list(node):
            pairs = [_keyword_pair(child) for child in node.children]
            return "[" + ", ".join(pairs) + "]"
        return "[" + ", ".join(inline(child) for child in node.children) + "]"
    raise AssertionError(f"unreachable node variant: {type(node).__name__}")


def inspect_atom(atom: Atom) -> str:
    """Textual form of an atom, with its leading colon where one applies."""
    name = atom.name
    if name in _BARE_ATOMS:
        return name
    if name == "Elixir":
        return name
    if name.startswith(_ALIAS_PREFIX) and _ALIAS_RX.match(name[len(_ALIAS_PREFIX):]):
        return name[len(_ALIAS_PREFIX):]
    if _IDENTIFIER_RX.match(name) or _ALIAS_RX.match(name) or name in _OPERATOR_ATOMS:
        return ":" + name
    return ":" + quote_string(name)


def quote_string(text: str) -> str:
    """Double-quoted, escaped form of a string."""
    escaped = "".join(_STRING_ESCAPES.get(ch, ch) for ch in text)
    return "\"" + escaped.replace("#{", "\\#{") + "\""


def format_number(value: Any) -> str:
    """Integers as-is; floats in their shortest round-trip `inspect` form."""
    if isinstance(value, float):
        return format_float(value)
    return str(value)


def format_float(value: float) -> str:
    """
    Shortest digits that read back as the same float, with the decimal
    point placed the way `inspect` does: `1.0e20`, `1.0e3`, `100.0`,
    `0.001`. Scientific notation is used when it is strictly shorter.

    Args:
        value: Float to format.

    Returns:
        str: Textual form (`repr` for infinities and NaN).
    """
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    # value == 0.<digits> * 10**place
    place = len(digits) + exponent
    return sign + _place_point(digits, place)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _inline_leaf(leaf: Leaf) -> str:
    if leaf.tag is LeafTag.ATOM:
        return inspect_atom(leaf.value)
    if leaf.tag is LeafTag.STRING:
        return quote_string(leaf.value)
    if leaf.tag is LeafTag.NUMBER:
        return format_number(leaf.value)

    value = leaf.value
    if isinstance(value, (bytes, bytearray)):
        return "<<" + ", ".join(str(b) for b in value) + ">>"
    if isinstance(value, dict):
        return _inline_map(value)
    return repr(value)


def _inline_map(mapping: dict) -> str:
    if not mapping:
        return "%{}"
    if all(isinstance(k, Atom) and _KEYWORD_KEY_RX.match(k.name) for k in mapping):
        parts = [f"{k.name}: {inline(v)}" for k, v in mapping.items()]
    else:
        parts = [f"{inline(k)} => {inline(v)}" for k, v in mapping.items()]
    return "%{" + ", ".join(parts) + "}"


def _is_keyword_list(node: VariableComposite) -> bool:
    """Non-empty list made only of {atom, value} pairs."""
    if not node.children:
        return False
    for child in node.children:
        if not isinstance(child, FixedComposite) or len(child.children) != 2:
            return False
        key = child.children[0]
        if not isinstance(key, Leaf) or key.tag is not LeafTag.ATOM:
            return False
    return True


def _keyword_pair(pair: FixedComposite) -> str:
    key, value = pair.children
    name = key.value.name
    label = name if _KEYWORD_KEY_RX.match(name) else quote_string(name)
    return f"{label}: {inline(value)}"


def _place_point(digits: str, place: int) -> str:
    if 0 < place < len(digits):
        return digits[:place] + "." + digits[place:]
    if place == 0:
        return "0." + digits

    exp_text = str(place - 1)
    exp_cost = len(exp_text) + 1 + (2 if len(digits) == 1 else 1)

    if place < 0:
        if 2 - place <= exp_cost:
            return "0." + "0" * -place + digits
    elif place - len(digits) + 2 <= exp_cost:
        return digits + "0" * (place - len(digits)) + ".0"

    if len(digits) == 1:
        return f"{digits}.0e{exp_text}"
    return f"{digits[0]}.{digits[1:]}e{exp_text}"
