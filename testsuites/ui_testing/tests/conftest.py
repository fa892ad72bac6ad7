"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the browser-backed suites.

Key Features:
- One Chromium per test run, one context per test
- Demo site served from memory through Playwright request routing, so the
  suites need no web server or network access
- Session wired to the test's page
- Screenshot capture on failure

Tests are skipped when no Chromium build can be launched
(run `playwright install chromium` to enable them).

================================================================================
"""

from pathlib import Path
from typing import Dict, Generator
from urllib.parse import urlparse

import allure
import pytest
from loguru import logger
from playwright.sync_api import Browser, Error as PlaywrightError, Page, sync_playwright

from testsuites.ui_testing.tests import site
from uiready.framework import DriverEnvironment, PlaywrightDriver, Session, SessionConfig


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def browser() -> Generator[Browser, None, None]:
    """
    Session-scoped Chromium shared by all UI tests.
    """
    playwright = sync_playwright().start()
    try:
        browser = playwright.chromium.launch(headless=True)
    except PlaywrightError as e:
        playwright.stop()
        pytest.skip(f"Chromium could not be launched: {e}")

    yield browser

    browser.close()
    playwright.stop()


@pytest.fixture(scope="function")
def page(browser: Browser) -> Generator[Page, None, None]:
    """
    Function-scoped page in its own browser context.
    """
    context = browser.new_context(viewport={"width": 1280, "height": 800})
    page = context.new_page()
    yield page
    context.close()


# ================================================================================
# Demo Site
# ================================================================================

@pytest.fixture
def pages_served() -> Dict[str, str]:
    """
    Path -> HTML served under the demo host. Tests may add or replace entries.
    """
    return dict(site.PAGES)


@pytest.fixture
def demo_site(page: Page, pages_served: Dict[str, str]) -> Dict[str, str]:
    """
    Route every request for the demo host to `pages_served`.
    """

    def handle(route):
        path = urlparse(route.request.url).path
        body = pages_served.get(path)
        if body is None:
            route.fulfill(status=404, content_type="text/html", body="<h1>Not Found</h1>")
        else:
            route.fulfill(status=200, content_type="text/html", body=body)

    page.route(f"{site.HOST}/**", handle)
    return pages_served


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture
def session(page: Page, demo_site) -> Generator[Session, None, None]:
    """
    Session whose driver wraps the test's page.
    """
    environment = DriverEnvironment(
        SessionConfig(), driver_factory=lambda config: PlaywrightDriver(page)
    )
    session = Session(site.HOST, environment)
    yield session
    session.close()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach a full-page screenshot to the Allure report when a UI test fails.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = getattr(item, "funcargs", {}).get("page")
        if page is not None:
            try:
                allure.attach(
                    page.screenshot(full_page=True),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except PlaywrightError as e:
                logger.warning(f"Failed to capture screenshot on failure: {e}")


@pytest.fixture
def screenshots_dir(tmp_path: Path) -> Path:
    """
    Provides a temporary directory for screenshots.
    """
    screenshots = tmp_path / "screenshots"
    screenshots.mkdir(exist_ok=True)
    return screenshots
