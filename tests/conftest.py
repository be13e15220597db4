"""
Shared pytest fixtures and configuration for namestore tests.

This module provides:
- Auto-marking of unit / integration tests by location
- Settings and logging-context cleanup for test isolation
- Sample stores (empty, case-sensitive, with duplicates and null keys)

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_something(duplicate_store):
        ...
"""

import logging
import sys
from pathlib import Path
from typing import Generator

import pytest
import structlog

# Ensure namestore package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from namestore.core.comparers import ORDINAL
from namestore.core.logging import clear_context
from namestore.core.settings import reset_settings
from namestore.core.store import NameValueStore


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        # Mark all tests without explicit markers as unit tests
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_fixture(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Drop cached settings and NAMESTORE_* env vars around each test.

    Keeps a developer's shell environment from leaking into comparer or
    capacity defaults.
    """
    for name in ("NAMESTORE_COMPARER", "NAMESTORE_INITIAL_CAPACITY",
                 "NAMESTORE_LOG_LEVEL", "NAMESTORE_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def clean_log_context_fixture() -> Generator[None, None, None]:
    """Clear bound structlog context before and after each test."""
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def unconfigured_logging_fixture() -> Generator[None, None, None]:
    """
    Start every test with structlog unconfigured and the namestore logger
    at its default level, the state a host application sees on import.
    """
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    logging.getLogger("namestore").setLevel(logging.NOTSET)


# =============================================================================
# Sample Stores
# =============================================================================


@pytest.fixture
def store() -> NameValueStore:
    """Empty store with the default (case-insensitive) comparer."""
    return NameValueStore()


@pytest.fixture
def ordinal_store() -> NameValueStore:
    """Empty store with the case-sensitive comparer."""
    return NameValueStore(ORDINAL)


@pytest.fixture
def duplicate_store() -> NameValueStore:
    """
    Store with case-insensitive duplicates and two null-keyed entries.

    Positions:
        0: A=1   1: a=2   2: B=3   3: None=4   4: None=5
    """
    s = NameValueStore()
    s.add("A", 1)
    s.add("a", 2)
    s.add("B", 3)
    s.add(None, 4)
    s.add(None, 5)
    return s
