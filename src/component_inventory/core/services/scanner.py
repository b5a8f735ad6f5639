from __future__ import annotations

"""
Source File Discovery Service.

Walks a project subtree and returns the script files eligible for component
analysis. Only directory listings are performed here; file contents are read
later by the parser adapter.
"""

import logging
import os
import re
from typing import List, Optional

from component_inventory.core.pipeline.components.filters import (
    compile_patterns,
    default_exclude_patterns,
    default_extensions,
    has_source_extension,
    matches_any,
)
from component_inventory.domain.component_models import DirectoryAccessError, SourceFile
from component_inventory.infra.fs import relative_posix_path

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_source_files(
        root_dir: str,
        base_dir: Optional[str] = None,
        extensions: Optional[List[str]] = None,
        exclude_patterns: Optional[List[str]] = None,
) -> List[SourceFile]:
    """
    Collect every source file under a root directory.

    Entries whose name matches an exclusion pattern are skipped, and
    excluded directories are never descended into. Within a directory,
    entries are visited in name order and subdirectories are expanded in
    place, so the output order is stable for an unchanged filesystem.

    Args:
        root_dir: Directory to walk.
        base_dir: Directory that relative paths are computed from.
                  Defaults to root_dir.
        extensions: Whitelist of file extensions.
        exclude_patterns: Raw regexes matched against entry names.

    Returns:
        List[SourceFile]: Eligible files, possibly empty.

    Raises:
        DirectoryAccessError: If root_dir is missing or cannot be listed.
    """
    root_abs = os.path.abspath(root_dir)
    base_abs = os.path.abspath(base_dir) if base_dir else root_abs
    exts = extensions if extensions is not None else default_extensions()
    exclude_rx = compile_patterns(
        exclude_patterns if exclude_patterns is not None else default_exclude_patterns()
    )

    if not os.path.exists(root_abs):
        raise DirectoryAccessError(root_abs, "directory does not exist")
    if not os.path.isdir(root_abs):
        raise DirectoryAccessError(root_abs, "not a directory")

    try:
        entries = _sorted_entries(root_abs)
    except OSError as e:
        raise DirectoryAccessError(root_abs, e.strerror or str(e)) from e

    files: List[SourceFile] = []
    _collect_entries(entries, base_abs, exts, exclude_rx, files)

    logger.debug(f"Collected {len(files)} source files under {root_abs}")
    return files


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _sorted_entries(directory: str) -> List[os.DirEntry]:
    """List a directory, ordered by entry name."""
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def _collect_entries(
        entries: List[os.DirEntry],
        base_dir: str,
        extensions: List[str],
        exclude_rx: List[re.Pattern],
        files: List[SourceFile],
) -> None:
    """Depth-first accumulation of eligible files."""
    for entry in entries:
        if matches_any(entry.name, exclude_rx):
            continue

        # Symlinked directories are not followed to avoid traversal loops
        if entry.is_dir(follow_symlinks=False):
            try:
                sub_entries = _sorted_entries(entry.path)
            except OSError as e:
                logger.warning(f"Skipping unreadable directory {entry.path}: {e}")
                continue
            _collect_entries(sub_entries, base_dir, extensions, exclude_rx, files)
            continue

        if has_source_extension(entry.name, extensions):
            files.append(SourceFile(
                file_path=entry.path,
                rel_path=relative_posix_path(entry.path, base_dir),
            ))
