from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures that materialize small React source trees on disk.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Return a factory that writes a source tree under a fresh project root.

    The factory takes a mapping of POSIX relative paths to file contents and
    returns the project root.
    """
    root = tmp_path / "project"
    root.mkdir()

    def _write(files: Dict[str, str]) -> Path:
        for rel_path, content in files.items():
            target = root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def sample_ui_project(write_project: Callable[[Dict[str, str]], Path]) -> Path:
    """
    A small design system: a card composed of primitives, plus an app page
    outside the UI directory that uses the card.
    """
    return write_project({
        "src/components/ui/Card.tsx": (
            "import { Button } from './Button';\n"
            "export function Card() {\n"
            "  return <div className=\"card\"><Button /></div>;\n"
            "}\n"
        ),
        "src/components/ui/Button.tsx": (
            "export function Button() {\n"
            "  return null;\n"
            "}\n"
        ),
        "src/pages/Home.jsx": (
            "import { Card } from '../components/ui/Card';\n"
            "export const Home = () => <main><Card /></main>;\n"
        ),
    })
