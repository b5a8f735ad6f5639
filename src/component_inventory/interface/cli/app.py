from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, JSON file and CLI overrides),
scan execution, and result rendering.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from component_inventory.core.analysis.tree_renderer import render_component_tree
from component_inventory.core.pipeline.engine import run_scan
from component_inventory.core.pipeline.stages.validator import validate_config
from component_inventory.domain.component_models import DirectoryAccessError, ScanResult
from component_inventory.domain.config import get_default_config, load_config, save_config
from component_inventory.infra.fs import write_text_lines
from component_inventory.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from component_inventory.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_DIRECTORY_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 inaccessible root,
             130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(
        LoggingConfig(level=log_level, console=True, log_file=args.log_file),
        force=True,
    )

    # Drain queued records before returning, while the console stream is still open
    try:
        return _execute(args)
    finally:
        shutdown_logging()


def _execute(args: argparse.Namespace) -> int:
    """
    Resolve the configuration, run the scan and render its outputs.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Process exit code.
    """
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults vs JSON file)
    if args.config_file:
        base_conf = load_config(args.config_file)
    else:
        base_conf = get_default_config()

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config_file:
        save_config(clean_conf, args.save_config_file)

    # 6. Scan execution phase
    try:
        result = run_scan(clean_conf)
    except DirectoryAccessError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_DIRECTORY_ERROR
    except KeyboardInterrupt:
        logger.warning("Scan interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Scan failed: {e}", exc_info=True)
        print(f"ERROR: Scan failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 7. Output rendering and persistence phase
    payload = result.to_dict()

    try:
        if args.output_file:
            write_text_lines(args.output_file, [json.dumps(payload, ensure_ascii=False, indent=2)])
            logger.info(f"Inventory saved to file: {args.output_file}")

        tree_lines = render_component_tree(result.tree)
        if args.tree_file:
            write_text_lines(args.tree_file, tree_lines)
            logger.info(f"Component tree saved to file: {args.tree_file}")
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        print(f"ERROR: Failed to write output: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if args.print_tree:
        print("\n".join(tree_lines))

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a value are merged; unset CLI flags keep the base.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "input_path", "base_path", "include_path",
        "extensions", "exclude_patterns",
        "include_nested_definitions", "max_workers",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ScanResult) -> None:
    """
    Format and print the scan result to the standard output.

    Args:
        result: The scan result to render.
    """
    summary = result.summary

    print("Component inventory generated.")
    print(f"Include path: {result.include_path}")
    print(f"Components: {result.total_components}")
    print(f"Roots: {', '.join(result.roots) if result.roots else '(none)'}")

    stats_keys = {
        "files_analyzed": "Files analyzed",
        "files_skipped": "Files skipped",
        "components_discovered": "Components discovered (unfiltered)",
    }
    for key, label in stats_keys.items():
        if key in summary:
            print(f"{label}: {summary[key]}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
