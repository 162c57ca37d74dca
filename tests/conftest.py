"""
Pytest Configuration for the Kanban Flow Simulator
==================================================

Root conftest.py - registers shared fixtures from tests/fixtures/.
"""

import logging

import pytest

# Shared fixtures
from tests.fixtures import *  # noqa: F401,F403


def pytest_configure(config):
    """Configure pytest with custom markers."""
    # Markers are defined in pyproject.toml
    pass


def pytest_collection_modifyitems(config, items):
    """Automatically add markers based on test location."""
    for item in items:
        if "/unit/" in item.nodeid:
            item.add_marker(pytest.mark.unit)
            item.add_marker(pytest.mark.fast)  # Unit tests are fast by default

        # Add feature area markers
        if "/cli/" in item.nodeid:
            item.add_marker(pytest.mark.cli)
        if "/storage/" in item.nodeid:
            item.add_marker(pytest.mark.storage)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler/propagation changes a ProductionLogger may leave behind."""
    package_logger = logging.getLogger("kanban_engine")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = propagate
