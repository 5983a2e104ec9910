from __future__ import annotations

"""
Unit tests for the CLI controller.

Runs main() in-process and checks stdout, stderr and exit codes.
Logging is shut down right after each run so the queue listener
flushes into the captured streams.
"""

import io
import json

from astviz.domain.config import get_default_config, load_config
from astviz.infra.logging import shutdown_logging
from astviz.interface.cli import app
from astviz.interface.cli.app import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, main

PLUS_TREE = (
    "{:+, [], [{:x, [], nil}, {:y, [], nil}]}\n"
    "├── :+\n"
    "├── []\n"
    "└── [{:x, [], nil}, {:y, [], nil}]\n"
    "    ├── {:x, [], nil}\n"
    "    └── {:y, [], nil}\n"
)


def run(argv):
    try:
        return main(argv)
    finally:
        shutdown_logging()


def test_expression_renders_tree(capsys):
    assert run(["-e", "x + y"]) == EXIT_OK
    assert capsys.readouterr().out == PLUS_TREE


def test_stats_compact(capsys):
    assert run(["-e", "x + y", "--stats"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == "Nodes: 3, Depth: 1, Funcs: 1, Vars: 2, Literals: 0\n" + PLUS_TREE


def test_stats_detailed_with_color(capsys):
    assert run(["-e", "x + y", "--detailed", "--color"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("=== AST Analysis ===\n")
    assert "\x1b[34m:+\x1b[0m" in out


def test_json_report(capsys):
    assert run(["-e", "x + y", "--json"]) == EXIT_OK
    report = json.loads(capsys.readouterr().out)

    assert report["tree"] == PLUS_TREE.rstrip("\n")
    assert report["stats"] == {
        "total_nodes": 3, "max_depth": 1, "function_calls": 1, "variables": 2, "literals": 0,
    }


def test_emit_tree_feeds_input(tmp_path, capsys):
    assert run(["-e", "x + y", "--emit-tree"]) == EXIT_OK
    doc = capsys.readouterr().out

    path = tmp_path / "tree.json"
    path.write_text(doc, encoding="utf-8")

    assert run(["-i", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == PLUS_TREE


def test_stdin_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('[1, {"atom": "ok"}]'))

    assert run(["-i", "-"]) == EXIT_OK
    assert capsys.readouterr().out == "[1, :ok]\n├── 1\n└── :ok\n"


def test_policy_flag(capsys):
    assert run(["-e", "x + y", "--policy", "nonempty"]) == EXIT_OK
    assert "    │   └── nil" in capsys.readouterr().out


def test_missing_input_is_usage_error(capsys):
    assert run([]) == EXIT_USAGE
    assert "ERROR: one of -i/--input" in capsys.readouterr().err


def test_quote_error_is_usage_error(capsys):
    assert run(["-e", "for i in x: pass"]) == EXIT_USAGE
    assert "Unsupported Python syntax: For" in capsys.readouterr().err


def test_invalid_document(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('{"map": 1}', encoding="utf-8")

    assert run(["-i", str(path)]) == EXIT_USAGE
    assert "ERROR:" in capsys.readouterr().err


def test_unexpected_failure_maps_to_exit_failure(monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(app, "print_tree", boom)
    assert run(["-e", "x"]) == EXIT_FAILURE
    assert "ERROR: boom" in capsys.readouterr().err


def test_recursion_error_maps_to_exit_failure(monkeypatch, capsys):
    def deep(*args, **kwargs):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(app, "print_tree", deep)
    assert run(["-e", "x"]) == EXIT_FAILURE
    assert "recursion limit" in capsys.readouterr().err


def test_dump_config_applies_overrides(capsys):
    assert run(["--dump-config", "--color", "--policy", "nonempty"]) == EXIT_OK
    conf = json.loads(capsys.readouterr().out)

    assert conf["color"] is True
    assert conf["expansion_policy"] == "nonempty"


def test_save_config_persists_settings(capsys):
    assert run(["--save-config", "--detailed"]) == EXIT_OK
    capsys.readouterr()

    conf = load_config()
    assert conf["show_stats"] is True
    assert conf["stats_style"] == "detailed"

    # Persisted settings apply to the next run
    assert run(["-e", "x + y"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("=== AST Analysis ===")


def test_use_defaults_ignores_persisted_settings(capsys):
    run(["--save-config", "--stats"])
    capsys.readouterr()

    assert run(["-e", "x + y", "--use-defaults"]) == EXIT_OK
    assert capsys.readouterr().out == PLUS_TREE


def test_invalid_persisted_value_warns(isolated_home, capsys):
    isolated_home.mkdir(parents=True, exist_ok=True)
    (isolated_home / "config.json").write_text(
        json.dumps({"settings": {"expansion_policy": "greedy"}}), encoding="utf-8"
    )

    assert run(["-e", "x + y"]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == PLUS_TREE
    assert "Configuration Constraint" in captured.err


def test_meta_flag(capsys):
    assert run(["-e", "x", "--meta"]) == EXIT_OK
    out = capsys.readouterr().out

    assert out.startswith("{:x, [line: 1, column: 1], nil}\n")
    assert "│   ├── {:line, 1}\n│   └── {:column, 1}\n└── nil\n" in out


def test_defaults_untouched_by_runs():
    run(["-e", "x"])
    assert load_config() == get_default_config()
