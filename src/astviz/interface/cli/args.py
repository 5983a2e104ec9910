from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from astviz.core.services.validator import POLICY_NAMES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the astviz CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="astviz",
        description="Render nested syntax trees as box-drawn text and report their shape.",
    )

    # --- Input Sources (exactly one) ---
    source = p.add_mutually_exclusive_group(required=False)
    source.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="JSON tree document to render ('-' reads stdin).",
    )
    source.add_argument(
        "-e", "--expr",
        dest="expression",
        default=None,
        help="Python expression or statements to quote and render.",
    )
    source.add_argument(
        "-p", "--python-file",
        dest="python_file",
        default=None,
        help="Python source file to quote and render.",
    )

    # --- Rendering ---
    p.add_argument(
        "--color",
        action="store_true",
        help="Colorize atoms, strings and numbers with ANSI escapes.",
    )
    p.add_argument(
        "--policy",
        dest="expansion_policy",
        choices=POLICY_NAMES,
        default=None,
        help="Rule deciding which child composites get their own subtree.",
    )
    p.add_argument(
        "--meta",
        action="store_true",
        help="Attach line/column metadata when quoting Python source.",
    )

    # --- Statistics ---
    p.add_argument(
        "--stats",
        action="store_true",
        help="Print shape statistics before the tree.",
    )
    p.add_argument(
        "--detailed",
        action="store_true",
        help="Use the framed multi-line statistics report (implies --stats).",
    )

    # --- Output Formats ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the tree text and statistics as a JSON object.",
    )
    p.add_argument(
        "--emit-tree",
        action="store_true",
        help="Print the input tree as a JSON tree document instead of rendering it.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Read settings from this configuration file.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings as the new defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None (or are omitted), so they never
    mask persisted settings.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["expansion_policy"] = args.expansion_policy
    overrides["log_file"] = args.log_file

    if args.color:
        overrides["color"] = True
    if args.meta:
        overrides["with_meta"] = True
    if args.stats or args.detailed:
        overrides["show_stats"] = True
    if args.detailed:
        overrides["stats_style"] = "detailed"
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
