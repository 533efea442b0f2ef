"""
Shared pytest fixtures for AutoDispose tests.
"""
import os
import sys

import pytest

# Headless runs (CI) have no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture(autouse=True)
def diagnostics():
    """Shared diagnostics config, reset to defaults around every test."""
    from core.disposal import reset_diagnostics
    config = reset_diagnostics()
    config.report_enabled = False
    config.track_performance = False
    yield config
    reset_diagnostics()


@pytest.fixture
def registry():
    """Fresh DisposalRegistry using the shared diagnostics config."""
    from core.disposal import DisposalRegistry
    return DisposalRegistry(owner_name="TestComponent")
