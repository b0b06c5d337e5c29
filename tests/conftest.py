"""
Pytest Configuration for verstamp Testing
=========================================

Root conftest.py - shared fixtures live in tests/fixtures/.
"""

import warnings

import pytest

# Import shared fixtures
from tests.fixtures import *


def pytest_collection_modifyitems(config, items):
    """Automatically add markers based on test location."""
    for item in items:
        if "/unit/" in item.nodeid:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.fast)  # Unit tests are fast by default
        elif "/integration/" in item.nodeid:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)

        if "/cli/" in item.nodeid:
            item.add_marker(pytest.mark.cli)
        if "config" in item.nodeid.lower():
            item.add_marker(pytest.mark.config)


def pytest_runtest_setup(item):
    """Setup for each test run."""
    warnings.filterwarnings("ignore", category=DeprecationWarning)


def pytest_sessionstart(session):
    """Called at start of test session."""
    print("\n" + "=" * 80)
    print("verstamp Testing Framework")
    print("=" * 80)
    print()


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    """Snapshot directories are never removed; keep them under tmp_path."""
    import tempfile

    snapshot_root = tmp_path / "tmp"
    snapshot_root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(snapshot_root))
    return snapshot_root
