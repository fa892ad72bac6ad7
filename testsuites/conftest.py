"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the test suites.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against the in-memory driver"
    )
    config.addinivalue_line(
        "markers", "ui: Tests that drive a real browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "readiness: Tests related to Ready/Loader rule evaluation"
    )
    config.addinivalue_line(
        "markers", "waits: Tests related to polling waits"
    )
    config.addinivalue_line(
        "markers", "store: Tests related to the session store"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add the domain marker from the test's directory.
    """
    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "uiready - Page Readiness Framework",
        "=" * 60,
        "",
    ]
