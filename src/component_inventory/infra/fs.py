from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and artifact persistence helpers.
Acts as an abstraction over the 'os' module so that every stage of the
scanner produces the same POSIX-style identifiers on Windows and Unix-like
systems.
"""

import os
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_posix_path(path: str) -> str:
    """Convert native separators to forward slashes."""
    return path.replace("\\", "/")


def relative_posix_path(path: str, base_dir: str) -> str:
    """
    Compute the stable, serializable identifier of a file.

    Args:
        path: Absolute path of the file.
        base_dir: Directory the identifier is relative to.

    Returns:
        str: Relative path using '/' separators.
    """
    return to_posix_path(os.path.relpath(path, base_dir))

# -----------------------------------------------------------------------------
# ARTIFACT PERSISTENCE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_text_lines(save_path: str, lines: List[str]) -> None:
    """
    Persist text lines to disk, creating the parent directory if needed.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    out_dir = os.path.dirname(os.path.abspath(save_path))
    ok, err = safe_mkdir(out_dir)
    if not ok:
        raise OSError(f"Cannot create output directory '{out_dir}': {err}")

    with open(save_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
