"""
================================================================================
Element Resolver
================================================================================

Resolves Locators to live elements through the driver, on every call.

Provides:
    - Single / multiple resolution
    - Predicate-based disambiguation among several matches
    - Presence checks that never raise
    - Bounded polling waits with an injectable clock and sleeper

Clock and sleeper are plain callables (seconds), so tests can drive the
polling loop deterministically:

    >>> resolver = ElementResolver(driver, clock=fake.now, sleep=fake.sleep)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, Callable, List

import allure
from loguru import logger

from .driver import Driver, ElementHandle
from .exceptions import (
    ElementNotFound,
    PredicateNoMatch,
    PredicateSourceEmpty,
    TimedOut,
)
from .locator import Locator


ElementPredicate = Callable[[ElementHandle], bool]

# Defaults in milliseconds
DEFAULT_TIMEOUT_MS = 10000
DEFAULT_POLL_INTERVAL_MS = 200


class ElementResolver:
    """
    Resolution layer between Locators and the driver.

    Nothing is cached: each method asks the driver again, so the result
    always reflects the current DOM.

    Args:
        driver: Driver capability used for lookups
        clock: Monotonic time source in seconds
        sleep: Sleeper taking seconds
    """

    def __init__(
        self,
        driver: Driver,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        if driver is None:
            raise TypeError("ElementResolver requires a driver")
        self.driver = driver
        self.clock = clock
        self.sleep = sleep

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve_one(self, locator: Locator) -> ElementHandle:
        """
        Resolve the first element matching `locator`.

        Raises:
            ElementNotFound: If nothing matches
        """
        return self.driver.find_one(locator)

    def resolve_all(self, locator: Locator) -> List[ElementHandle]:
        """Resolve every element matching `locator` (possibly none)."""
        return list(self.driver.find_all(locator))

    def resolve_where(self, locator: Locator, predicate: ElementPredicate) -> ElementHandle:
        """
        Resolve the first element matching `locator` that satisfies `predicate`.

        Raises:
            PredicateSourceEmpty: If `locator` matched nothing
            PredicateNoMatch: If elements matched but none satisfied `predicate`
        """
        candidates = self.resolve_all(locator)
        if not candidates:
            raise PredicateSourceEmpty(locator, predicate)

        for element in candidates:
            if predicate(element):
                return element

        raise PredicateNoMatch(locator, predicate, candidates=len(candidates))

    def resolve_all_where(self, locator: Locator, predicate: ElementPredicate) -> List[ElementHandle]:
        """
        Resolve every element matching `locator` that satisfies `predicate`.

        Raises:
            PredicateSourceEmpty: If `locator` matched nothing
            PredicateNoMatch: If elements matched but none satisfied `predicate`
        """
        candidates = self.resolve_all(locator)
        if not candidates:
            raise PredicateSourceEmpty(locator, predicate)

        matches = [element for element in candidates if predicate(element)]
        if not matches:
            raise PredicateNoMatch(locator, predicate, candidates=len(candidates))
        return matches

    def is_present(self, locator: Locator) -> bool:
        """Whether at least one element matches `locator`. Never raises ElementNotFound."""
        try:
            self.resolve_one(locator)
            return True
        except ElementNotFound:
            return False

    # =========================================================================
    # Waiting
    # =========================================================================

    def wait_until(
        self,
        locator: Locator,
        predicate: ElementPredicate,
        timeout: int = DEFAULT_TIMEOUT_MS,
        poll_interval: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> ElementHandle:
        """
        Poll until the first element matching `locator` satisfies `predicate`.

        Returns immediately (without sleeping) once the predicate passes.
        Interruptions of the sleep are ignored and polling continues.

        Args:
            locator: Element to wait for
            predicate: Condition the first match must satisfy
            timeout: Total time budget in milliseconds
            poll_interval: Delay between attempts in milliseconds

        Returns:
            The element that satisfied the predicate

        Raises:
            TimedOut: When the deadline passes. `cause` is the last
                ElementNotFound seen, or None if the element was always
                found but never satisfied the predicate.
        """
        with allure.step(f"Wait until {locator} satisfies {getattr(predicate, '__name__', 'predicate')}"):
            deadline = self.clock() + timeout / 1000.0
            last_not_found = None
            attempts = 0

            while self.clock() < deadline:
                attempts += 1
                try:
                    element = self.resolve_one(locator)
                except ElementNotFound as e:
                    last_not_found = e
                else:
                    if predicate(element):
                        logger.debug(f"{locator} satisfied the wait condition after {attempts} attempt(s)")
                        return element

                try:
                    self.sleep(poll_interval / 1000.0)
                except InterruptedError:
                    logger.debug(f"Sleep interrupted while waiting for {locator}; continuing to poll")

            message = (
                f"Timed out after {timeout} milliseconds waiting for the first element "
                f"found by {locator} to match the predicate"
            )
            logger.warning(f"{message} ({attempts} attempts, last failure: {last_not_found or 'predicate'})")
            if last_not_found is None:
                raise TimedOut(message)
            raise TimedOut(message, cause=last_not_found) from last_not_found

    def wait_until_condition(
        self,
        locator: Locator,
        condition: Callable[..., Any],
        timeout: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        """
        Wait using a driver-native condition; polling is left to the driver.

        Raises:
            TimedOut: If the driver reports a timeout
        """
        with allure.step(f"Wait until {locator} satisfies driver condition"):
            self.driver.wait_for(locator, condition, timeout)


__all__ = [
    "ElementResolver",
    "ElementPredicate",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_POLL_INTERVAL_MS",
]
