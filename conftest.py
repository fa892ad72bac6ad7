"""
Repository-level pytest configuration.

Sets safe defaults for local runs so the suites never depend on a
developer's shell:
  - headless browser unless the caller says otherwise
  - a fresh ConfigLoader singleton per test session
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from uiready.framework.config import ConfigLoader


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "DRIVER_HEADLESS": "true",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
