"""
================================================================================
Driver Capability
================================================================================

The narrow browser capability consumed by the framework, plus a Playwright
(sync API) implementation of it.

The rest of the framework only ever talks to `Driver` and `ElementHandle`,
so tests can plug in an in-memory fake and other browser bindings can be
adapted without touching the resolution or validation layers.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, TypeVar

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator as PlaywrightLocator
from playwright.sync_api import Page, Playwright, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config import Browser
from .exceptions import ElementNotFound, TimedOut
from .locator import Locator, LocatorKind


T = TypeVar("T")


class ElementHandle(Protocol):
    """Per-element queries and commands the framework relies on."""

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_selected(self) -> bool: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def get_css_value(self, property_name: str) -> str: ...

    def get_tag_name(self) -> str: ...

    def get_text(self) -> str: ...

    def get_location(self) -> Dict[str, float]: ...

    def get_size(self) -> Dict[str, float]: ...

    def click(self) -> None: ...

    def clear(self) -> None: ...

    def send_keys(self, *chars: str) -> None: ...

    def submit(self) -> None: ...


class Driver(Protocol):
    """Element lookup, navigation and scripting."""

    def find_one(self, locator: Locator) -> ElementHandle: ...

    def find_all(self, locator: Locator) -> Sequence[ElementHandle]: ...

    def navigate(self, url: str) -> None: ...

    def refresh(self) -> None: ...

    def back(self) -> None: ...

    def forward(self) -> None: ...

    def execute_script(self, script: str, *args: Any) -> Any: ...

    def execute_async_script(self, script: str, *args: Any) -> Any: ...

    def wait_for(self, locator: Locator, condition: Callable[..., Any], timeout: int) -> None: ...

    def quit(self) -> None: ...


# =============================================================================
# Playwright Adapter
# =============================================================================

def to_playwright_selector(locator: Locator) -> str:
    """
    Translate a Locator into a Playwright selector string.

    Args:
        locator: Framework locator

    Returns:
        Selector string understood by `page.locator()`
    """
    pattern = locator.pattern
    kind = locator.kind
    if kind is LocatorKind.CSS:
        return f"css={pattern}"
    if kind is LocatorKind.XPATH:
        return f"xpath={pattern}"
    if kind is LocatorKind.ID:
        return f"css=[id={json.dumps(pattern)}]"
    if kind is LocatorKind.TAG_NAME:
        return f"css={pattern}"
    if kind is LocatorKind.CLASS_NAME:
        return f"css=[class~={json.dumps(pattern)}]"
    if kind is LocatorKind.LINK_TEXT:
        return f"css=a:text-is({json.dumps(pattern)})"
    if kind is LocatorKind.PARTIAL_LINK_TEXT:
        return f"css=a:has-text({json.dumps(pattern)})"
    raise ValueError(f"Unsupported locator kind: {kind}")


class PlaywrightElement:
    """
    ElementHandle backed by a single-element Playwright Locator.

    Playwright locators are lazy, so a query against an element that has
    left the DOM waits for it and times out. Queries report that as
    ElementNotFound, the same way a lookup that matches nothing does.

    Args:
        locator: Locator narrowed to one element (`.first` or `.nth(i)`)
        source: Framework locator the element was found with, for messages
    """

    def __init__(self, locator: PlaywrightLocator, source: Optional[Locator] = None):
        self._locator = locator
        self._source = source

    def _query(self, action: Callable[[PlaywrightLocator], T]) -> T:
        try:
            return action(self._locator)
        except PlaywrightTimeoutError as e:
            source = self._source or self._locator
            raise ElementNotFound(source, f"Element for {source} is no longer attached") from e

    def is_displayed(self) -> bool:
        return self._locator.is_visible()

    def is_enabled(self) -> bool:
        return self._query(lambda loc: loc.is_enabled())

    def is_selected(self) -> bool:
        return bool(self._query(lambda loc: loc.evaluate("el => Boolean(el.selected || el.checked)")))

    def get_attribute(self, name: str) -> Optional[str]:
        return self._query(lambda loc: loc.get_attribute(name))

    def get_css_value(self, property_name: str) -> str:
        return self._query(lambda loc: loc.evaluate(
            "(el, name) => getComputedStyle(el).getPropertyValue(name)",
            property_name,
        ))

    def get_tag_name(self) -> str:
        return self._query(lambda loc: loc.evaluate("el => el.tagName.toLowerCase()"))

    def get_text(self) -> str:
        return self._query(lambda loc: loc.inner_text()).strip()

    def get_location(self) -> Dict[str, float]:
        box = self._query(lambda loc: loc.bounding_box()) or {}
        return {"x": box.get("x", 0), "y": box.get("y", 0)}

    def get_size(self) -> Dict[str, float]:
        box = self._query(lambda loc: loc.bounding_box()) or {}
        return {"width": box.get("width", 0), "height": box.get("height", 0)}

    def click(self) -> None:
        self._locator.click()

    def clear(self) -> None:
        self._locator.clear()

    def send_keys(self, *chars: str) -> None:
        self._locator.press_sequentially("".join(chars))

    def submit(self) -> None:
        self._locator.evaluate("el => (el.form || el).requestSubmit()")

    def __repr__(self) -> str:
        return f"PlaywrightElement({self._locator})"


class PlaywrightDriver:
    """
    Driver implementation over a Playwright sync `Page`.

    Owns the Playwright runtime and browser when created through `launch()`;
    wraps an existing page otherwise (the caller stays responsible for it).

    Usage:
        driver = PlaywrightDriver.launch(config)
        driver.navigate("https://example.com")
        element = driver.find_one(Locator("h1"))
        driver.quit()
    """

    def __init__(
        self,
        page: Page,
        playwright: Optional[Playwright] = None,
        browser: Any = None,
    ):
        self.page = page
        self._playwright = playwright
        self._browser = browser

    @classmethod
    def launch(cls, config) -> "PlaywrightDriver":
        """
        Start Playwright and open a page according to a SessionConfig.

        Args:
            config: SessionConfig describing browser, proxy and binary path

        Returns:
            A driver that owns (and will close) the launched browser
        """
        playwright = sync_playwright().start()
        try:
            if config.browser is Browser.REMOTE_CHROME:
                endpoint = f"http://{config.remote_host}:{config.remote_port}"
                browser = playwright.chromium.connect_over_cdp(endpoint)
            else:
                launcher = (
                    playwright.firefox if config.browser is Browser.FIREFOX
                    else playwright.chromium
                )
                launch_options: Dict[str, Any] = {"headless": config.headless}
                if config.proxy_server:
                    launch_options["proxy"] = {"server": config.proxy_server}
                if config.driver_binary_path:
                    launch_options["executable_path"] = config.driver_binary_path
                browser = launcher.launch(**launch_options)
            page = browser.new_page()
        except Exception:
            playwright.stop()
            raise

        page.set_default_timeout(config.implicit_wait_ms)
        logger.debug(
            f"Browser started: {config.browser.value} (headless={config.headless}, "
            f"proxy={config.proxy_server or 'none'})"
        )
        return cls(page, playwright=playwright, browser=browser)

    # =========================================================================
    # Element Lookup
    # =========================================================================

    def find_all(self, locator: Locator) -> List[PlaywrightElement]:
        matches = self.page.locator(to_playwright_selector(locator))
        return [PlaywrightElement(matches.nth(i), locator) for i in range(matches.count())]

    def find_one(self, locator: Locator) -> PlaywrightElement:
        matches = self.page.locator(to_playwright_selector(locator))
        if matches.count() == 0:
            raise ElementNotFound(locator)
        return PlaywrightElement(matches.first, locator)

    # =========================================================================
    # Navigation / Scripting
    # =========================================================================

    def navigate(self, url: str) -> None:
        self.page.goto(url)

    def refresh(self) -> None:
        self.page.reload()

    def back(self) -> None:
        self.page.go_back()

    def forward(self) -> None:
        self.page.go_forward()

    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run a WebDriver-style script body (`return ...`, `arguments[n]`).
        """
        return self.page.evaluate(
            "([body, args]) => new Function(body)(...args)",
            [script, list(args)],
        )

    def execute_async_script(self, script: str, *args: Any) -> Any:
        """
        Run a script body that reports its result through a callback.

        The callback is passed as the last argument, so the script reads it
        as `arguments[arguments.length - 1]`.
        """
        return self.page.evaluate(
            "([body, args]) => new Promise((resolve) => new Function(body)(...args, resolve))",
            [script, list(args)],
        )

    def wait_for(self, locator: Locator, condition: Callable[..., Any], timeout: int) -> None:
        """
        Delegate polling to a Playwright-native condition.

        `condition` receives the Playwright Locator and the timeout in
        milliseconds, e.g. `lambda loc, t: expect(loc).to_be_visible(timeout=t)`.
        """
        native = self.page.locator(to_playwright_selector(locator))
        try:
            condition(native, timeout)
        except (PlaywrightTimeoutError, AssertionError) as e:
            raise TimedOut(
                f"Timed out after {timeout} milliseconds waiting for {locator} "
                f"to satisfy {condition!r}"
            ) from e

    def quit(self) -> None:
        """Close the browser and stop Playwright if this driver launched them."""
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser cleanly: {e}")
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        logger.debug("Browser closed")


__all__ = [
    "ElementHandle",
    "Driver",
    "PlaywrightElement",
    "PlaywrightDriver",
    "to_playwright_selector",
]
