from __future__ import annotations

"""
File Filtering Engine.

Implements the regex-based exclusion logic applied to single directory and
file names during collection, plus the extension whitelist that decides
which files are script sources.
"""

import os
import re
from typing import Iterable, List

from component_inventory.domain.constants import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_EXTENSIONS,
)

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """
    Get the default list of targeted file extensions.

    Returns:
        List[str]: Plain script, JSX and typed variants.
    """
    return list(DEFAULT_EXTENSIONS)


def default_exclude_patterns() -> List[str]:
    """
    Get the system-level exclusion patterns.

    Covers hidden entries, test-fixture directories, dependency folders and
    the stories/sandbox markers of component playgrounds.

    Returns:
        List[str]: List of regex patterns for common exclusions.
    """
    return list(DEFAULT_EXCLUDE_PATTERNS)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: Iterable[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed regex strings are discarded so that a bad user pattern cannot
    abort a scan.

    Args:
        patterns: Raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a string matches at least one compiled regex pattern.

    Args:
        name: Filename or directory name to evaluate.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(name) for rx in compiled_patterns)


def has_source_extension(file_name: str, extensions: Iterable[str]) -> bool:
    """Check the file extension against the whitelist."""
    _, ext = os.path.splitext(file_name)
    return ext in extensions
