"""
================================================================================
Selector
================================================================================

A Locator bound to a session's ElementResolver.

Selectors are what page objects and components declare as fields. Every
query or command resolves a fresh element and discards it afterwards, so
re-rendered DOM nodes never show up as stale references.

Usage:
    search_box = session.selector("input[name='q']")
    search_box.click().send_keys("playwright")
    search_box.wait_until(lambda el: el.is_displayed())

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from .driver import ElementHandle
from .locator import Locator, LocatorKind, with_container
from .resolver import (
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    ElementPredicate,
    ElementResolver,
)


class Selector:
    """
    Locator + resolver pair with element queries and chainable commands.

    Queries and commands act on the *first* element found.
    """

    def __init__(
        self,
        resolver: ElementResolver,
        pattern: str,
        kind: LocatorKind = LocatorKind.CSS,
    ):
        self.resolver = resolver
        self.locator = Locator(pattern, kind)

    @classmethod
    def for_locator(cls, resolver: ElementResolver, locator: Locator) -> "Selector":
        return cls(resolver, locator.pattern, locator.kind)

    @property
    def pattern(self) -> str:
        return self.locator.pattern

    @property
    def kind(self) -> LocatorKind:
        return self.locator.kind

    def within(self, child_pattern: str) -> "Selector":
        """
        Create a CSS Selector nested inside this one.

        Raises:
            UnsupportedComposition: If this selector is not CSS
        """
        return Selector.for_locator(self.resolver, with_container(self.locator, child_pattern))

    # =========================================================================
    # Resolution
    # =========================================================================

    def get(self) -> ElementHandle:
        return self.resolver.resolve_one(self.locator)

    def get_multiple(self) -> List[ElementHandle]:
        return self.resolver.resolve_all(self.locator)

    def get_where(self, predicate: ElementPredicate) -> ElementHandle:
        return self.resolver.resolve_where(self.locator, predicate)

    def get_multiple_where(self, predicate: ElementPredicate) -> List[ElementHandle]:
        return self.resolver.resolve_all_where(self.locator, predicate)

    def count(self) -> int:
        return len(self.get_multiple())

    # =========================================================================
    # Element Information
    # =========================================================================

    def is_present(self) -> bool:
        return self.resolver.is_present(self.locator)

    def is_displayed(self) -> bool:
        return self.get().is_displayed()

    def is_enabled(self) -> bool:
        return self.get().is_enabled()

    def is_selected(self) -> bool:
        return self.get().is_selected()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.get().get_attribute(name)

    def get_css_value(self, property_name: str) -> str:
        return self.get().get_css_value(property_name)

    def get_tag_name(self) -> str:
        return self.get().get_tag_name()

    def text(self) -> str:
        """Visible text of the first element, without surrounding whitespace."""
        return self.get().get_text()

    def location(self) -> Dict[str, float]:
        return self.get().get_location()

    def size(self) -> Dict[str, float]:
        return self.get().get_size()

    def rect(self) -> Dict[str, float]:
        element = self.get()
        return {**element.get_location(), **element.get_size()}

    def css_classes(self) -> List[str]:
        """Classes on the first element's `class` attribute."""
        return (self.get_attribute("class") or "").split()

    def has_css_classes(self, classes: Iterable[str]) -> bool:
        """Whether the first element carries every class in `classes`."""
        return set(classes).issubset(self.css_classes())

    # =========================================================================
    # Element Actions
    # =========================================================================

    def click(self) -> "Selector":
        self.get().click()
        return self

    def clear(self) -> "Selector":
        self.get().clear()
        return self

    def send_keys(self, *chars: str) -> "Selector":
        self.get().send_keys(*chars)
        return self

    def submit(self) -> "Selector":
        self.get().submit()
        return self

    # =========================================================================
    # Waiting
    # =========================================================================

    def wait_until(
        self,
        predicate: ElementPredicate,
        timeout: int = DEFAULT_TIMEOUT_MS,
        poll_interval: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> "Selector":
        self.resolver.wait_until(self.locator, predicate, timeout=timeout, poll_interval=poll_interval)
        return self

    def wait_until_condition(
        self,
        condition: Callable[..., Any],
        timeout: int = DEFAULT_TIMEOUT_MS,
    ) -> "Selector":
        self.resolver.wait_until_condition(self.locator, condition, timeout=timeout)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selector):
            return NotImplemented
        return self.locator == other.locator and self.resolver is other.resolver

    def __hash__(self) -> int:
        return hash((self.locator, id(self.resolver)))

    def __repr__(self) -> str:
        return f"Selector({self.locator})"


__all__ = [
    "Selector",
]
