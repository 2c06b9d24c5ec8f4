"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import make_test_database


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def memory_db():
    """Fresh in-memory database; yields its session factory."""
    engine, session_factory = make_test_database()
    yield session_factory
    engine.dispose()


@pytest.fixture
def file_db(tmp_path):
    """
    File-backed SQLite database.

    Each thread gets its own connection, which the in-memory database
    cannot provide.
    """
    engine, session_factory = make_test_database(f"sqlite:///{tmp_path / 'thesis_match_test.db'}")
    yield session_factory
    engine.dispose()
