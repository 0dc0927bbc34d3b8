"""Root test configuration: environment isolation and session-level artifact cleanup"""

import os
import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["dist"]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep MDPAGE_* variables from the developer shell out of every test."""
    for name in list(os.environ):
        if name.startswith("MDPAGE_"):
            monkeypatch.delenv(name)


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove output directories created during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)
