"""Pytest configuration shared by the snapshot tests.

Puts the project root on ``sys.path`` so ``import workspace_snapshot`` works
without installing the package, and provides a small on-disk workspace.
"""

import json
import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def write_json(path, value):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value), encoding="utf-8")
    return path


@pytest.fixture
def workspace_dir(tmp_path):
    """A workspace folder with three books, two of them in a subfolder."""

    root = tmp_path / "ws"
    write_json(
        root / "workspace.json",
        {
            "schemaVersion": "1.0.0",
            "workspace": {"id": "ws-1", "name": "Demo"},
            "folders": [],
            "books": [
                {"id": "b1", "name": "First", "dataPath": "books/book-001.json"},
                {"id": "b2", "name": "Second", "dataPath": "books/book-002.json"},
                {"id": "b3", "name": "Third", "dataPath": "book-003.json"},
            ],
        },
    )
    write_json(root / "books" / "book-001.json", {"book": {"id": "b1"}, "sheets": []})
    write_json(root / "books" / "book-002.json", {"book": {"id": "b2"}, "sheets": [{"id": "s1"}]})
    write_json(root / "book-003.json", {"book": {"id": "b3", "name": "Dritte ✓"}, "sheets": []})
    return root
