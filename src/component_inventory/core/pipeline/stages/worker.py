from __future__ import annotations

"""
Atomic Analysis Worker.

Encapsulates the processing of a single source file: read, parse, classify
the component definitions and extract their rendered children. The worker
shares no state with other workers, so it can run inside a
ThreadPoolExecutor. Read and parse failures are returned, never raised.
"""

import logging
import os
from typing import List, Optional, Tuple

from component_inventory.core.analysis.classifier import classify_definitions
from component_inventory.core.analysis.parser import parse_source, read_source
from component_inventory.core.analysis.syntax import ClassifierRules
from component_inventory.core.analysis.usage_extractor import extract_child_components
from component_inventory.domain.component_models import FileAnalysis, SourceFile

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def analyze_file_task(source: SourceFile, rules: Optional[ClassifierRules] = None) -> FileAnalysis:
    """
    Execute the full analysis lifecycle for a single file.

    Args:
        source: The file to analyze.
        rules: Framework conventions for the classifier and extractor.

    Returns:
        FileAnalysis: The usages found, or a failed analysis with the
                      diagnostic ('Failed to read ...' / 'Failed to parse ...').
    """
    try:
        text = read_source(source.file_path)
    except (OSError, UnicodeDecodeError) as e:
        return FileAnalysis(source=source, ok=False, error=f"Failed to read {source.file_path}: {e}")

    return analyze_source_text(source, text, rules)


def analyze_source_text(
        source: SourceFile,
        text: str,
        rules: Optional[ClassifierRules] = None,
) -> FileAnalysis:
    """Parse already-read text and collect its component usages."""
    rules = rules or ClassifierRules()

    outcome = parse_source(text, os.path.basename(source.file_path))
    if not outcome.ok or outcome.root is None:
        return FileAnalysis(
            source=source,
            ok=False,
            error=f"Failed to parse {source.file_path}: {outcome.error}",
        )

    usages: List[Tuple[str, Tuple[str, ...]]] = []
    for definition in classify_definitions(outcome.root, rules):
        children = extract_child_components(definition.body, rules)
        usages.append((definition.name, tuple(children)))
        logger.debug(
            f"{source.rel_path}: {definition.kind.value} '{definition.name}' "
            f"renders {children or 'nothing'}"
        )

    return FileAnalysis(source=source, ok=True, usages=tuple(usages))
