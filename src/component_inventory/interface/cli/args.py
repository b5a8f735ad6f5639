from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw argparse
namespace into configuration overrides understood by the scan engine.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the component inventory CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="component-inventory",
        description="Map which UI components render which, for a directory of a React code base.",
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Root directory to scan (default: current directory).",
    )
    p.add_argument(
        "--base",
        dest="base_path",
        default=None,
        help="Directory that reported file paths are relative to (default: the input).",
    )
    p.add_argument(
        "--include-path",
        dest="include_path",
        default=None,
        help="Path fragment selecting the reported components (default: components/ui/).",
    )

    # --- Discovery Filters ---
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated list of source extensions.",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated list of regexes for excluded file/directory names.",
    )

    # --- Analysis ---
    p.add_argument(
        "--nested",
        action="store_true",
        help="Also register component definitions nested inside other definitions.",
    )
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of parallel analysis workers (default: 1).",
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the inventory as JSON.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Write the JSON inventory to this file.",
    )
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Print the component trees.",
    )
    p.add_argument(
        "--tree-file",
        dest="tree_file",
        default=None,
        help="Write the component trees to this text file.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file merged over the defaults.",
    )
    p.add_argument(
        "--save-config",
        dest="save_config_file",
        default=None,
        help="Persist the effective configuration to this JSON file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_path
    overrides["base_path"] = args.base_path
    overrides["include_path"] = args.include_path
    overrides["max_workers"] = args.max_workers

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.nested:
        overrides["include_nested_definitions"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
