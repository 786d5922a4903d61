from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building document trees on disk and in memory.
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from compendium.core.indexing.document_index import DocumentIndex  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """
    Create a small documentation project on disk.

    Structure:
    /handbook
      1 Introduction.txt
      1.1 Scope.txt
      2 Setup.txt
      /3 Reference
        1 Api.txt
        2 Faq.txt
      /assets
        logo.png
      draft.txt          ($$nocompile)
    """
    root = tmp_path / "handbook"
    root.mkdir()

    (root / "1 Introduction.txt").write_text("# Introduction\nWelcome.", encoding="utf-8")
    (root / "1.1 Scope.txt").write_text("# Scope\nWhat is covered.", encoding="utf-8")
    (root / "2 Setup.txt").write_text("# Setup\nSee $$rootDir$$assets/logo.png", encoding="utf-8")

    reference = root / "3 Reference"
    reference.mkdir()
    (reference / "1 Api.txt").write_text("# Api\nCalls.", encoding="utf-8")
    (reference / "2 Faq.txt").write_text("", encoding="utf-8")

    assets = root / "assets"
    assets.mkdir()
    (assets / "logo.png").write_bytes(b"\x89PNG")

    (root / "draft.txt").write_text("$$nocompile\n# Draft", encoding="utf-8")

    return root


@pytest.fixture
def make_index() -> Callable[..., DocumentIndex]:
    """
    Return a factory building an index from in-memory descriptors.

    Each descriptor is a (kind, relative path, header) tuple; kind is "dir" or
    "file". The root is always "/docs".
    """
    def _factory(entries, skipped=None, finalize=True, settings=None) -> DocumentIndex:
        index = DocumentIndex(settings)
        index.add_root("/docs", "docs", 0, 0)
        for kind, rel_path, header in entries:
            path = f"/docs/{rel_path}"
            name = rel_path.rsplit("/", 1)[-1]
            if kind == "dir":
                index.add_directory(path, name, 0, 0)
            else:
                index.add_file(path, name, 0, 0, header)
        if finalize:
            index.finalize(skipped)
        return index

    return _factory
