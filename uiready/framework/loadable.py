"""
================================================================================
Loadables: Page Objects and Components
================================================================================

Foundation classes for the Page Object Model.

    Page      - a URL-addressable page; composes its path from every layer
                of its class hierarchy
    Component - a reusable sub-tree owned by a page or another component,
                rooted at a container Selector

Both declare their readiness rules explicitly in `__init__`. Because each
layer calls `super().__init__()` before declaring its own fields, the rule
registry (and the path) is ordered from the most-base layer to the most-derived.

Usage:
    class AccountPage(Page):
        def __init__(self, session):
            super().__init__(session)
            self.extend_path("/account")
            self.header = self.declare("header", self.selector("header"), Ready.visible())

    class SettingsPage(AccountPage):
        def __init__(self, session):
            super().__init__(session)
            self.extend_path("/settings")
            self.spinner = self.declare(
                "spinner", self.selector(".spinner"), loader=Loader(must_be_absent=True)
            )

    SettingsPage(session).get_relative_path_to()   # "/account/settings"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, TypeVar, Union

import allure
from loguru import logger

from .exceptions import MissingPath, TimedOut
from .locator import Locator, LocatorKind
from .readiness import Loader, Ready
from .resolver import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS
from .selector import Selector


T = TypeVar("T")
L = TypeVar("L", bound="Loadable")


@dataclass(frozen=True)
class RuleEntry:
    """One declared field: its target plus the rules attached to it."""

    name: str
    target: Any
    ready: Ready
    loader: Optional[Loader] = None


class Loadable:
    """
    Base class for page objects and components.

    Args:
        session: The Session this loadable belongs to, or another Loadable
            whose session should be shared
    """

    def __init__(self, session):
        if session is None:
            raise TypeError("A loadable requires a session")
        if isinstance(session, Loadable):
            session = session.session
        self._session = session
        self._rules: Dict[str, RuleEntry] = {}
        self._path_segments: list = []

    @property
    def session(self):
        return self._session

    # =========================================================================
    # Declarations
    # =========================================================================

    def selector(self, pattern: str, kind: LocatorKind = LocatorKind.CSS) -> Selector:
        """Create a Selector bound to this loadable's session."""
        return Selector(self._session.resolver, pattern, kind)

    def declare(
        self,
        name: str,
        target: T,
        ready: Optional[Ready] = None,
        loader: Optional[Loader] = None,
    ) -> T:
        """
        Attach readiness rules to a field and return the field unchanged.

        A name declared again by a subclass replaces the rules but keeps the
        position claimed by the base layer.

        Args:
            name: Field name used in logs
            target: A Selector or a Component
            ready: Ready rule (defaults to "must be present")
            loader: Optional Loader rule
        """
        if not name:
            raise ValueError("A declared field needs a name")
        self._rules[name] = RuleEntry(name, target, ready or Ready(), loader)
        return target

    @property
    def rules(self) -> Tuple[RuleEntry, ...]:
        """Declared fields, most-base layer first."""
        return tuple(self._rules.values())

    # =========================================================================
    # Paths
    # =========================================================================

    def extend_path(self, segment: str) -> None:
        """Append this layer's path segment (e.g. "/settings")."""
        self._path_segments.append(segment)

    @property
    def path_segments(self) -> Tuple[str, ...]:
        return tuple(self._path_segments)

    def get_relative_path_to(self) -> str:
        """
        Relative path to this page, built from every layer's segment.

        Raises:
            MissingPath: If no layer declared a path
        """
        if not self._path_segments:
            raise MissingPath(
                f"The {type(self).__name__} does not have a relative URL declared. "
                f"Call extend_path() in its __init__ to add one."
            )
        return "".join(self._path_segments)

    def get_path_to(self) -> str:
        """Full URL to this page: the session host plus the relative path."""
        return self._session.host + self.get_relative_path_to()

    # =========================================================================
    # Readiness
    # =========================================================================

    def is_ready(self) -> bool:
        """Whether every declared rule currently holds."""
        from .validator import ReadinessValidator

        return ReadinessValidator().validate_loadable(self)

    def wait_until_ready(
        self: L,
        timeout: int = DEFAULT_TIMEOUT_MS,
        poll_interval: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> L:
        """
        Poll `is_ready()` until it passes.

        Raises:
            TimedOut: If the loadable is still not ready after `timeout` ms
        """
        resolver = self._session.resolver
        with allure.step(f"Wait until {type(self).__name__} is ready"):
            deadline = resolver.clock() + timeout / 1000.0
            while resolver.clock() < deadline:
                if self.is_ready():
                    return self
                try:
                    resolver.sleep(poll_interval / 1000.0)
                except InterruptedError:
                    logger.debug(f"Sleep interrupted while waiting for {type(self).__name__}")

        raise TimedOut(f"Timed out after {timeout} milliseconds waiting for {type(self).__name__} to be ready")


class Page(Loadable):
    """
    Base class for all page objects.

    Provides navigation on top of the Loadable path composition.
    """

    @allure.step("Navigate to page")
    def navigate(self: L) -> L:
        """Go to this page's full URL."""
        url = self.get_path_to()
        self.session.driver_environment.go_to_url(url)
        logger.debug(f"Navigated to: {url}")
        return self

    def navigate_to_base_url(self: L) -> L:
        """Go to the session host and return this page object."""
        self.session.driver_environment.go_to_url(self.session.host)
        return self

    def get_comments(self) -> list:
        """Text of every HTML comment on the current page."""
        return self.session.driver_environment.execute_js(
            "const walker = document.createTreeWalker(document, NodeFilter.SHOW_COMMENT);"
            "const comments = [];"
            "while (walker.nextNode()) { comments.push(walker.currentNode.nodeValue); }"
            "return comments;"
        )


class Component(Loadable):
    """
    Base class for all component objects.

    Args:
        owner: The page or component that encapsulates this component
        container: Selector (or CSS Locator/pattern) of the element that is
            the immediate parent of the whole component

    Raises:
        TypeError: If `container` is None
        ValueError: If the container pattern is empty
    """

    def __init__(self, owner: Loadable, container: Union[Selector, Locator, str]):
        super().__init__(owner)

        if container is None:
            raise TypeError("The container for a component object cannot be None")
        if isinstance(container, str):
            container = self.selector(container)
        elif isinstance(container, Locator):
            container = Selector.for_locator(self.session.resolver, container)
        if not container.pattern:
            raise ValueError("The container's locator for a component object cannot be None or empty")

        self._owner = owner
        self._container = container

    @classmethod
    def from_component(cls, other: "Component") -> "Component":
        """Create a component sharing another component's owner and container."""
        return cls(other.owner, other.container)

    @property
    def owner(self) -> Loadable:
        return self._owner

    @property
    def container(self) -> Selector:
        return self._container

    def within(self, child_pattern: str) -> Selector:
        """CSS Selector for an element inside this component's container."""
        return self._container.within(child_pattern)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self._owner == other._owner and self._container == other._container

    def __hash__(self) -> int:
        return hash((type(self), self._container))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(owner={type(self._owner).__name__}, container={self._container})"


__all__ = [
    "RuleEntry",
    "Loadable",
    "Page",
    "Component",
]
