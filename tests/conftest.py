from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory and of the logging subsystem.
3. Shared sample trees used across unit tests.
"""

import os
import sys

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from astviz.domain.nodes import Atom, FixedComposite, Leaf, VariableComposite, to_node  # noqa: E402
from astviz.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the user data directory to a per-test temporary folder."""
    home = tmp_path / "astviz_home"
    monkeypatch.setenv("ASTVIZ_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach astviz logging handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


# -----------------------------------------------------------------------------
# Shared Trees
# -----------------------------------------------------------------------------
@pytest.fixture
def plus_call():
    """
    Quoted `x + y` with empty metadata:
    {:+, [], [{:x, [], nil}, {:y, [], nil}]}
    """
    def var(name):
        return FixedComposite.of(Leaf.atom(name), VariableComposite(), Leaf.atom("nil"))

    return FixedComposite.of(
        Leaf.atom("+"),
        VariableComposite(),
        VariableComposite.of(var("x"), var("y")),
    )


@pytest.fixture
def plus_call_with_context():
    """
    Quoted `x + y` as produced with import metadata:
    {:+, [context: Elixir, import: Kernel], [{:x, [], Elixir}, {:y, [], Elixir}]}
    """
    elixir = Atom("Elixir")
    return to_node((
        Atom("+"),
        [(Atom("context"), elixir), (Atom("import"), Atom("Elixir.Kernel"))],
        [(Atom("x"), [], elixir), (Atom("y"), [], elixir)],
    ))
