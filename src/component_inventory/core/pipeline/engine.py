from __future__ import annotations

"""
Core scan orchestration.

This module coordinates the whole inventory workflow:
1. Validates the configuration and resolves paths.
2. Collects the source files (the only fatal step).
3. Analyzes every file, sequentially or on a worker pool.
4. Merges the analyses into the component graph, in collection order.
5. Derives parents, applies the path filter and serializes the trees.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from component_inventory.core.analysis.graph_builder import ComponentGraph
from component_inventory.core.analysis.path_filter import filter_component_map
from component_inventory.core.analysis.syntax import ClassifierRules
from component_inventory.core.analysis.tree_generator import build_component_tree
from component_inventory.core.pipeline.stages.validator import validate_config
from component_inventory.core.pipeline.stages.worker import analyze_file_task
from component_inventory.core.services.scanner import collect_source_files
from component_inventory.domain.component_models import FileAnalysis, ScanResult, SourceFile
from component_inventory.domain.constants import DEFAULT_INCLUDE_PATH
from component_inventory.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan(
        root_directory: str,
        include_path: str = DEFAULT_INCLUDE_PATH,
        **options: Any,
) -> ScanResult:
    """
    Build the component inventory of a source tree.

    Args:
        root_directory: Directory to scan.
        include_path: Relative path fragment selecting the reported components.
        **options: Any other configuration key (base_path, extensions,
                   exclude_patterns, include_nested_definitions, max_workers, ...).

    Returns:
        ScanResult: The filtered inventory.

    Raises:
        DirectoryAccessError: If the root directory is missing or unreadable.
    """
    config: Dict[str, Any] = dict(options)
    config["input_path"] = root_directory
    config["include_path"] = include_path
    return run_scan(config)


def run_scan(config: Optional[Dict[str, Any]]) -> ScanResult:
    """
    Execute a scan from a (raw or partial) configuration dictionary.

    Per-file read and parse failures are logged and skipped; they never
    appear in the result.

    Args:
        config: Configuration dictionary, validated before use.

    Returns:
        ScanResult: The filtered inventory with execution statistics in
                    'summary'.

    Raises:
        DirectoryAccessError: If the root directory is missing or unreadable.
    """
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root_dir = normalize_path(cfg["input_path"], os.getcwd())
    base_dir = normalize_path(cfg["base_path"], root_dir)
    rules = build_rules(cfg)

    logger.info(f"Scanning components under: {root_dir}")

    # 1) Collection (fatal on an inaccessible root)
    files = collect_source_files(
        root_dir,
        base_dir=base_dir,
        extensions=cfg["extensions"],
        exclude_patterns=cfg["exclude_patterns"],
    )

    # 2) Analysis and single-writer merge
    graph = ComponentGraph()
    analyzed = 0
    skipped = 0
    for analysis in _analyze_files(files, rules, cfg["max_workers"]):
        if not analysis.ok:
            skipped += 1
            logger.warning(analysis.error)
            continue
        analyzed += 1
        graph.merge(analysis)

    # 3) Derivation strictly after every merge
    graph.derive_parents()

    # 4) Projection and serialization
    filtered = filter_component_map(graph.components, cfg["include_path"])
    snapshot = build_component_tree(filtered)

    logger.info(
        f"Scan finished: {analyzed} files analyzed, {skipped} skipped, "
        f"{len(graph)} components discovered, {len(filtered)} kept under '{cfg['include_path']}'."
    )

    return ScanResult(
        success=True,
        generated_at=_utc_timestamp(),
        total_components=len(filtered),
        include_path=cfg["include_path"],
        components=snapshot.components,
        roots=snapshot.roots,
        tree=snapshot.tree,
        summary={
            "root_directory": root_dir,
            "base_directory": base_dir,
            "files_collected": len(files),
            "files_analyzed": analyzed,
            "files_skipped": skipped,
            "components_discovered": len(graph),
        },
    )


def build_rules(cfg: Dict[str, Any]) -> ClassifierRules:
    """Translate validated configuration keys into classifier rules."""
    return ClassifierRules(
        ref_forwarding_wrappers=frozenset(cfg["ref_forwarding_wrappers"]),
        framework_namespaces=frozenset(cfg["framework_namespaces"]),
        component_base_classes=frozenset(cfg["component_base_classes"]),
        include_nested_definitions=bool(cfg["include_nested_definitions"]),
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _analyze_files(
        files: List[SourceFile],
        rules: ClassifierRules,
        max_workers: int,
) -> Iterator[FileAnalysis]:
    """
    Yield analyses in collection order.

    The order matters: duplicate component names resolve to the file merged
    last, so results from the pool are consumed in submission order.
    """
    if max_workers <= 1 or len(files) < 2:
        for source in files:
            yield analyze_file_task(source, rules)
        return

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ComponentWorker") as executor:
        yield from executor.map(lambda source: analyze_file_task(source, rules), files)


def _utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
