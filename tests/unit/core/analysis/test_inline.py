from __future__ import annotations

"""
Unit tests for the Inline Formatter.

Covers atom spelling rules, string escaping and the compact forms of
tuples, lists, keyword lists, maps and binaries.
"""

import pytest

from astviz.core.analysis.inline import format_float, inline, inspect_atom, quote_string
from astviz.domain.nodes import Atom, FixedComposite, Leaf, VariableComposite


@pytest.mark.parametrize("name, expected", [
    ("foo", ":foo"),
    ("valid?", ":valid?"),
    ("__block__", ":__block__"),
    ("+", ":+"),
    ("|>", ":|>"),
    ("Foo", ":Foo"),
    ("nil", "nil"),
    ("true", "true"),
    ("Elixir", "Elixir"),
    ("Elixir.Kernel", "Kernel"),
    ("Elixir.Access", "Access"),
    ("foo bar", ":\"foo bar\""),
])
def test_inspect_atom(name, expected):
    assert inspect_atom(Atom(name)) == expected


def test_quote_string_escapes():
    assert quote_string("plain") == "\"plain\""
    assert quote_string("say \"hi\"\n") == "\"say \\\"hi\\\"\\n\""
    assert quote_string("#{x}") == "\"\\#{x}\""


def test_scalars():
    assert inline(Leaf.number(42)) == "42"
    assert inline(Leaf.number(3.5)) == "3.5"
    assert inline(Leaf.string("x")) == "\"x\""
    assert inline(None) == "nil"
    assert inline(True) == "true"


@pytest.mark.parametrize("value, expected", [
    (1e20, "1.0e20"),
    (1000.0, "1.0e3"),
    (100.0, "100.0"),
    (1.0, "1.0"),
    (2.5, "2.5"),
    (-12.0, "-12.0"),
    (123456.789, "123456.789"),
    (0.5, "0.5"),
    (0.001, "0.001"),
    (1.5e-10, "1.5e-10"),
    (0.0, "0.0"),
])
def test_format_float(value, expected):
    assert format_float(value) == expected


def test_float_leaves_use_inspect_notation():
    assert inline([1e20, 7]) == "[1.0e20, 7]"


def test_composites():
    assert inline(FixedComposite()) == "{}"
    assert inline(VariableComposite()) == "[]"
    assert inline((Atom("x"), [], None)) == "{:x, [], nil}"
    assert inline([1, "two", Atom("three")]) == "[1, \"two\", :three]"


def test_keyword_lists():
    assert inline([(Atom("line"), 1), (Atom("column"), 5)]) == "[line: 1, column: 5]"
    assert inline([(Atom("my key"), 1)]) == "[\"my key\": 1]"
    # Mixed lists are printed as plain lists
    assert inline([(Atom("a"), 1), 2]) == "[{:a, 1}, 2]"


def test_other_leaves():
    assert inline(b"\x01\x02") == "<<1, 2>>"
    assert inline({}) == "%{}"
    assert inline({Atom("a"): 1}) == "%{a: 1}"
    assert inline({"k": [1]}) == "%{\"k\" => [1]}"


def test_inline_is_deterministic(plus_call):
    assert inline(plus_call) == inline(plus_call) == "{:+, [], [{:x, [], nil}, {:y, [], nil}]}"
