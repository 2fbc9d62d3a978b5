"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as using the in-memory SQLite database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def isolated_lock_file(monkeypatch, tmp_path):
    """Keep population-run lock files out of the project root during tests."""
    lock_path = str(tmp_path / "match_job.lock")
    monkeypatch.setattr("pipeline.control.LOCK_FILE_PATH", lock_path)
    return lock_path
