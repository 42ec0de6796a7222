"""
Global pytest fixtures for radix64 tests.

This module provides:
- The radix64 module fixture
- Log isolation between tests
- Marker registration

Engine fixtures live in tests/fixtures/engines.py and are registered from
the root conftest so every test directory can use them.
"""

import logging

import pytest

# =============================================================================
# Module Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def radix64():
    """Import and return the radix64 module."""
    import radix64

    return radix64


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def restore_radix64_logger():
    """Restore the radix64 logger's handlers and level after each test."""
    logger = logging.getLogger("radix64")
    handlers = logger.handlers[:]
    level = logger.level
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
