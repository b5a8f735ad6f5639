from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the conventions the scanner relies on: which files are source
files, which framework names identify component definitions, and the
defaults of the path-restricted inventory.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

# Relative path fragment of the "public UI primitives" directory
DEFAULT_INCLUDE_PATH = "components/ui/"

DEFAULT_EXTENSIONS: List[str] = [".js", ".jsx", ".ts", ".tsx"]

# Regexes matched against single directory/file names
DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^\.",
    r"^__tests__$",
    r"^node_modules$",
    r"\.stories\.",
    r"\.ladle",
]

# -----------------------------------------------------------------------------
# FRAMEWORK CONVENTIONS
# -----------------------------------------------------------------------------
DEFAULT_FRAMEWORK_NAMESPACES: List[str] = ["React"]
DEFAULT_REF_FORWARDING_WRAPPERS: List[str] = ["forwardRef"]
DEFAULT_COMPONENT_BASE_CLASSES: List[str] = ["Component", "PureComponent"]

CYCLE_NOTE = "Cycle detected"
