from __future__ import annotations

"""
Unit tests for the JSON Tree Codec.
"""

import json

import pytest

from astviz.core.analysis.loader import dumps_tree, load_tree, loads_tree, node_from_json, node_to_json
from astviz.domain.errors import InvalidTreeDocument
from astviz.domain.nodes import Atom, Leaf, to_node

PLUS_DOC = {
    "tuple": [
        {"atom": "+"},
        [],
        [{"tuple": [{"atom": "x"}, [], None]}, {"tuple": [{"atom": "y"}, [], None]}],
    ]
}


def test_decode_quoted_call(plus_call):
    assert node_from_json(PLUS_DOC) == plus_call


def test_scalars():
    assert node_from_json(None) == Leaf.atom("nil")
    assert node_from_json(False) == Leaf.atom("false")
    assert node_from_json("s") == Leaf.string("s")
    assert node_from_json(2.5) == Leaf.number(2.5)


def test_encode_matches_document(plus_call):
    assert node_to_json(plus_call) == {
        "tuple": [
            {"atom": "+"},
            [],
            [{"tuple": [{"atom": "x"}, [], {"atom": "nil"}]}, {"tuple": [{"atom": "y"}, [], {"atom": "nil"}]}],
        ]
    }


def test_dumps_then_loads_preserves_tree(plus_call_with_context):
    assert loads_tree(dumps_tree(plus_call_with_context)) == plus_call_with_context


@pytest.mark.parametrize("doc", [
    {"map": {}},
    {"tuple": "nope"},
    {"atom": 1},
    {"tuple": [], "atom": "x"},
])
def test_rejects_unknown_objects(doc):
    with pytest.raises(InvalidTreeDocument):
        node_from_json(doc)


def test_rejects_invalid_json():
    with pytest.raises(InvalidTreeDocument, match="Invalid JSON"):
        loads_tree("[1, 2")


def test_unencodable_leaf():
    with pytest.raises(InvalidTreeDocument):
        node_to_json(to_node(b"\x00"))


def test_load_tree_from_disk(tmp_path, plus_call):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(PLUS_DOC), encoding="utf-8")

    assert load_tree(str(path)) == plus_call


def test_load_tree_missing_file(tmp_path):
    with pytest.raises(InvalidTreeDocument, match="Could not read"):
        load_tree(str(tmp_path / "absent.json"))


def test_atom_names_are_free_text():
    assert node_from_json({"atom": "Elixir.Kernel"}) == to_node(Atom("Elixir.Kernel"))
