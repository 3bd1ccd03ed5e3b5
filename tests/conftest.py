from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for recording backends and sample trees.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treewriter.infra.fs import RecordingBackend  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def recorder() -> RecordingBackend:
    """Return an empty in-memory backend with no injected failures."""
    return RecordingBackend()


@pytest.fixture
def docs_tree() -> Dict[str, Any]:
    """
    Return the small documentation project used by end-to-end scenarios.

    Returns:
        Dict[str, Any]: A tree with one nested directory, an empty
        subdirectory and a trailing top-level file.
    """
    return {
        "docs": {
            "README.md": "# Hi",
            "assets": {},
        },
        "LICENSE": "MIT",
    }


@pytest.fixture
def project_tree() -> Dict[str, Any]:
    """
    Return a larger tree mixing computed keys, sentinels and separator keys.
    """
    project_name = "Python project"
    adr_directory = "adr"
    adr_template = "\n".join(["# NUMBER. TITLE", "", "Date: DATE"])

    def markdown(name: str) -> str:
        return f"{name}.md"

    return {
        "/".join(["long", "path"]): {
            markdown("README"): f"# {project_name}",
            "docs": {
                markdown("README"): "# Documentation",
                "assets": {},
                "examples": {},
            },
            adr_directory: {
                "templates": {
                    markdown("template"): adr_template,
                },
            },
            "LICENSE": "MIT",
            ".adr-dir": adr_directory,
        },
        "other": {
            "not-create-1": False,
            "not-create-2": None,
            ".gitkeep": True,
            "path/as/file-name": "file path",
            "path": {
                "file": "existing path",
            },
        },
    }
