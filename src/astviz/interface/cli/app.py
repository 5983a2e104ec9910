from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, persisted file, command-line overrides), input
loading, rendering and exit-code mapping.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from astviz.core.analysis.loader import dumps_tree, load_tree, loads_tree
from astviz.core.analysis.python_quote import quote_file, quote_python
from astviz.core.analysis.stats import analyze, format_report, format_summary
from astviz.core.analysis.tree_renderer import render
from astviz.core.services.validator import policy_from_config, validate_config
from astviz.core.services.visualizer import analyze_and_print, print_tree, print_tree_colored
from astviz.domain.config import get_default_config, load_config, save_config
from astviz.domain.errors import AstVizError
from astviz.domain.nodes import Node
from astviz.infra.logging import LoggingConfig, configure_logging, get_logger
from astviz.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only until the configuration is known)
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "INFO"))
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration resolution
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    configure_logging(
        LoggingConfig(level=clean_conf["log_level"], log_file=clean_conf["log_file"] or None),
        force=True,
    )

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        if not save_config(clean_conf, args.config_path):
            print("ERROR: Could not save configuration.", file=sys.stderr)
            return EXIT_FAILURE
        logger.info("Configuration saved.")
        if not _has_input(args):
            return EXIT_OK

    if not _has_input(args):
        parser.print_usage(sys.stderr)
        print("ERROR: one of -i/--input, -e/--expr or -p/--python-file is required.", file=sys.stderr)
        return EXIT_USAGE

    # 4. Input loading and rendering
    try:
        node = _load_input(args, clean_conf)
        if args.emit_tree:
            print(dumps_tree(node))
        elif args.json_output:
            print(json.dumps(_build_json_report(node, clean_conf), ensure_ascii=False, indent=2))
        else:
            _print_human(node, clean_conf)
    except AstVizError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except RecursionError:
        msg = "Tree is nested deeper than the interpreter recursion limit allows."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Visualization failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of non-None overrides into the base configuration,
    restricted to known keys.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# INPUT LOADING
# -----------------------------------------------------------------------------

def _has_input(args: Any) -> bool:
    return any(v is not None for v in (args.input_path, args.expression, args.python_file))


def _load_input(args: Any, conf: Dict[str, Any]) -> Node:
    """Build the tree from whichever source was given."""
    if args.expression is not None:
        logger.debug("Quoting Python expression from the command line")
        return quote_python(args.expression, with_meta=conf["with_meta"])

    if args.python_file is not None:
        logger.info(f"Quoting Python file: {args.python_file}")
        return quote_file(args.python_file, with_meta=conf["with_meta"])

    if args.input_path == "-":
        logger.debug("Reading tree document from stdin")
        return loads_tree(sys.stdin.read())

    logger.info(f"Loading tree document: {args.input_path}")
    return load_tree(args.input_path)

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_human(node: Node, conf: Dict[str, Any]) -> None:
    policy = policy_from_config(conf)

    if not conf["color"]:
        if conf["show_stats"]:
            analyze_and_print(node, sink=sys.stdout, policy=policy, style=conf["stats_style"])
        else:
            print_tree(node, sink=sys.stdout, policy=policy)
        return

    if conf["show_stats"]:
        print(_format_stats(node, conf))
    print_tree_colored(node, sink=sys.stdout, policy=policy)


def _build_json_report(node: Node, conf: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "tree": render(node, policy=policy_from_config(conf)),
        "stats": analyze(node).to_dict(),
    }


def _format_stats(node: Node, conf: Dict[str, Any]) -> str:
    stats = analyze(node)
    if conf["stats_style"] == "detailed":
        return format_report(stats)
    return format_summary(stats)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
