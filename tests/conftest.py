"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import `crud_lib`
and the `crud` entry script without requiring PYTHONPATH to be set.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """A fresh store of each bundled backend."""
    from crud_lib.storage import create_storage
    return create_storage(backend=request.param, data_dir=tmp_path / "objects")
