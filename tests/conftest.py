"""Pytest configuration and fixtures."""

import logging

import pytest

from scopecheck.config import ReportOptions
from scopecheck.context import TestTree, get_tree


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up scopecheck loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("scopecheck")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture(autouse=True)
def reset_default_tree():
    """Start and leave every test with an empty default tree."""
    default = get_tree()
    default.reset()
    default.set_options(ReportOptions())
    yield
    default.reset()
    default.set_options(ReportOptions())


@pytest.fixture
def tree() -> TestTree:
    """Fresh tree rendering without ANSI colors."""
    return TestTree(options=ReportOptions(color=False))
