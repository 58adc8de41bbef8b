"""
Pytest configuration and shared fixtures for the whitelist tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

EMAILS = _common.EMAILS
make_items = _common.make_items
make_emails = _common.make_emails
make_tree = _common.make_tree
flip_byte = _common.flip_byte


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def emails():
    """The three whitelisted emails of the reference scenario."""
    return list(EMAILS)


@pytest.fixture
def items():
    """Seven distinct byte items (odd count exercises padding twice)."""
    return make_items(7)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove WHITELIST_* variables so config tests see only their own."""
    for name in [
        "WHITELIST_HASH_ALGORITHM",
        "WHITELIST_SORT_PAIRS",
        "WHITELIST_ITEMS_FILE",
        "WHITELIST_LOG_LEVEL",
        "WHITELIST_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
