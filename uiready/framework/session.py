"""
================================================================================
Session Management
================================================================================

Browser lifecycle and per-test state.

Features:
    - DriverEnvironment: lazily started driver, navigation and scripting
    - Session: one per test; owns the Store, the DriverEnvironment and
      the ElementResolver shared by every Selector of the test
    - open_session(): scoped acquisition that always closes the browser

Usage:
    with open_session("https://app.example.com") as session:
        page = LoginPage(session).navigate().wait_until_ready()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from loguru import logger

from .config import SessionConfig
from .driver import Driver, PlaywrightDriver
from .exceptions import SessionClosed
from .locator import LocatorKind
from .resolver import ElementResolver
from .selector import Selector
from .store import Store


DriverFactory = Callable[[SessionConfig], Driver]


class DriverEnvironment:
    """
    Owns the connection to the browser driver.

    The driver is only started when first needed, and `close()` quits it
    on every path. Once closed, the environment cannot be reused.

    Args:
        config: Options the browser is started with
        driver_factory: Builds a driver from the config
            (defaults to PlaywrightDriver.launch)
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        driver_factory: Optional[DriverFactory] = None,
    ):
        self.config = config or SessionConfig()
        self._driver_factory = driver_factory or PlaywrightDriver.launch
        self._driver: Optional[Driver] = None
        self._closed = False

    def __enter__(self) -> "DriverEnvironment":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosed("The DriverEnvironment has already been closed")

    @property
    def driver(self) -> Driver:
        """The driver, started on first access."""
        self._ensure_open()
        if self._driver is None:
            self._driver = self._driver_factory(self.config)
        return self._driver

    def is_browser_open(self) -> bool:
        return self._driver is not None

    def open_browser(self) -> None:
        """
        Start the browser.

        Raises:
            RuntimeError: If the browser is already open
        """
        self._ensure_open()
        if self._driver is not None:
            raise RuntimeError("The driver is not closed, is the browser already open?")
        self._driver = self._driver_factory(self.config)

    def close_browser(self) -> None:
        """Quit the browser; the next driver access starts a new one."""
        self._ensure_open()
        if self._driver is not None:
            self._driver.quit()
            self._driver = None

    # =========================================================================
    # Navigation / Scripting
    # =========================================================================

    def go_to_url(self, url: str) -> None:
        try:
            self.driver.navigate(url)
        except Exception:
            logger.error(f"Failed to navigate. Attempted URL: {url}")
            raise

    def refresh(self) -> "DriverEnvironment":
        self.driver.refresh()
        return self

    def back(self) -> "DriverEnvironment":
        self.driver.back()
        return self

    def forward(self) -> "DriverEnvironment":
        self.driver.forward()
        return self

    def execute_js(self, script: str, *args: Any) -> Any:
        """
        Execute a script on the current page.

        Arguments are available to the script as `arguments[n]`.
        """
        return self.driver.execute_script(script, *args)

    def execute_async_js(self, script: str, *args: Any) -> Any:
        """
        Execute a script that finishes by calling back.

        The callback is the last of `arguments`; whatever it is called with
        is returned.
        """
        return self.driver.execute_async_script(script, *args)

    def close(self) -> None:
        """Quit the driver (if started) and mark this environment closed."""
        self._closed = True
        driver, self._driver = self._driver, None
        if driver is not None:
            driver.quit()

    def __repr__(self) -> str:
        return (
            f"DriverEnvironment(browser={self.config.browser.value}, "
            f"open={self.is_browser_open()}, closed={self._closed})"
        )


class Session:
    """
    Environment and data for a single test.

    A fresh Session per test keeps browser state and stored data from
    leaking between tests.

    Args:
        host: Base URL pages are addressed relative to
        driver_environment: Browser access for this session
        store: Optional pre-populated Store
        resolver: Optional ElementResolver (built from the driver by default)
    """

    def __init__(
        self,
        host: str,
        driver_environment: DriverEnvironment,
        store: Optional[Store] = None,
        resolver: Optional[ElementResolver] = None,
    ):
        if not host:
            raise ValueError("The host for a Session cannot be None or empty")
        self._host = host
        self._driver_environment = driver_environment
        self._store = store if store is not None else Store()
        self._resolver = resolver
        self._closed = False

    @classmethod
    def default_session(cls, host: str, config: Optional[SessionConfig] = None) -> "Session":
        """Session with a Playwright driver configured from `config` (or ConfigLoader)."""
        config = config or SessionConfig.from_loader()
        return cls(host, DriverEnvironment(config))

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosed("The Session has already been closed")

    @property
    def store(self) -> Store:
        self._ensure_open()
        return self._store

    @property
    def host(self) -> str:
        self._ensure_open()
        return self._host

    @property
    def driver_environment(self) -> DriverEnvironment:
        self._ensure_open()
        return self._driver_environment

    @property
    def resolver(self) -> ElementResolver:
        """ElementResolver over this session's driver, created on first use."""
        self._ensure_open()
        if self._resolver is None:
            self._resolver = ElementResolver(self._driver_environment.driver)
        return self._resolver

    def selector(self, pattern: str, kind: LocatorKind = LocatorKind.CSS) -> Selector:
        return Selector(self.resolver, pattern, kind)

    def switch_hosts(self, new_host: str) -> "Session":
        """
        Point this session at a different host.

        Raises:
            ValueError: If `new_host` is empty or equal to the current host
        """
        self._ensure_open()
        if not new_host:
            raise ValueError("The host to switch to cannot be None or empty")
        if new_host == self._host:
            raise ValueError("The new host cannot be the same as the current host")
        logger.debug(f"Switching hosts: {self._host} -> {new_host}")
        self._host = new_host
        return self

    def close(self) -> None:
        """Close the driver environment and drop all session state."""
        if self._closed:
            return
        self._closed = True
        self._store = None
        self._resolver = None
        environment, self._driver_environment = self._driver_environment, None
        if environment is not None:
            environment.close()
        logger.debug(f"Session closed ({self._host})")

    def __repr__(self) -> str:
        return f"Session(host='{self._host}', closed={self._closed})"


@contextmanager
def open_session(
    host: str,
    config: Optional[SessionConfig] = None,
    driver_factory: Optional[DriverFactory] = None,
) -> Iterator[Session]:
    """
    Open a Session and close it however the block exits.

    Args:
        host: Base URL for the session
        config: Session options (read from ConfigLoader when omitted)
        driver_factory: Overrides how the driver is built
    """
    config = config or SessionConfig.from_loader()
    environment = DriverEnvironment(config, driver_factory)
    session = Session(host, environment)
    try:
        yield session
    finally:
        session.close()


__all__ = [
    "DriverEnvironment",
    "Session",
    "open_session",
]
