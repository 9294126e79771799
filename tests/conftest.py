"""
Pytest configuration and shared fixtures for bindkit tests.
"""

import logging
import os

import pytest

from bindkit.core.platform import clear_host_cache

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.ndk import (
    make_ndk,
    ndk_r21,
    ndk_r23,
)
from tests.fixtures.apple import (
    xcrun_runner,
    failing_xcrun_runner,
)
from tests.fixtures.projects import (
    stb_project,
    build_environ,
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that invoke a real compiler and bindgen",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging.basicConfig(force=True) calls made by the CLI."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def fresh_host_cache():
    """Clear the memoized build host tag around every test."""
    clear_host_cache()
    yield
    clear_host_cache()


@pytest.fixture
def clean_environ(monkeypatch):
    """Remove every variable bindkit reads from the process environment."""
    for key in list(os.environ):
        if key.startswith("CARGO_FEATURE_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("TARGET", "OUT_DIR", "ANDROID_NDK", "BINDGEN", "CC", "AR"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
