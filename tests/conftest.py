"""
Shared pytest fixtures for the hebrides test suite.

This module provides:
- Settings isolation (environment and the cached Settings instance)
- A clean ``hebrides`` logger for every test
- A tolerance helper for comparing float results
"""

import logging
import math
import os

import pytest

from hebrides.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Drop HEBRIDES_* variables and the cached Settings around each test."""
    for name in list(os.environ):
        if name.startswith("HEBRIDES_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(os.path.dirname(__file__))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any setup_logging() call so caplog sees library records."""
    yield
    package_logger = logging.getLogger("hebrides")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def approx():
    """Helper asserting two floats agree to an absolute tolerance."""
    def _approx(actual: float, expected: float, tol: float = 1e-12) -> None:
        assert math.isclose(float(actual), float(expected), rel_tol=0.0, abs_tol=tol), (
            f"{actual} != {expected} (tol {tol})"
        )
    return _approx
