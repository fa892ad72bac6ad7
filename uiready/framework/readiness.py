"""
================================================================================
Readiness Rules
================================================================================

Declarative expectations attached to Selector or Component fields of a
page object. `Loadable.is_ready()` evaluates them through the
ReadinessValidator.

    Ready  - the element must be present (and optionally visible, contain
             text, carry CSS classes, appear a certain number of times)
    Loader - the element is a transient loading indicator that must be gone
             or hidden before the page counts as ready

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class DocumentState(Enum):
    """Values of `document.readyState`, in load order."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    LOADED = "loaded"
    INTERACTIVE = "interactive"
    COMPLETE = "complete"

    @classmethod
    def identify(cls, browser_string: str) -> "DocumentState":
        """
        Map a browser ready-state string to a DocumentState.

        Raises:
            ValueError: If the string is not a known ready state
        """
        for state in cls:
            if state.value == (browser_string or "").lower():
                return state
        raise ValueError(
            f"Could not identify a DocumentState from the browser string: '{browser_string}'"
        )


@dataclass(frozen=True)
class CountConstraint:
    """
    How many elements a locator must match.

    `exactly` supersedes `at_least` / `at_most`. Values of zero or less
    mean "not constrained".
    """

    exactly: int = 0
    at_least: int = 0
    at_most: int = 0

    @classmethod
    def of(cls, exactly: int) -> "CountConstraint":
        return cls(exactly=exactly)

    @classmethod
    def between(cls, at_least: int = 0, at_most: int = 0) -> "CountConstraint":
        return cls(at_least=at_least, at_most=at_most)

    @property
    def is_constrained(self) -> bool:
        return self.exactly > 0 or self.at_least > 0 or self.at_most > 0

    def violation(self, count: int) -> Optional[str]:
        """Describe why `count` breaks the constraint, or None if it does not."""
        if self.exactly > 0:
            if count != self.exactly:
                return f"Expected to find {self.exactly} elements, but found {count}"
            return None
        if self.at_least > 0 and count < self.at_least:
            return f"Expected to find at least {self.at_least} elements, but found {count}"
        if self.at_most > 0 and count > self.at_most:
            return f"Expected to find at most {self.at_most} elements, but found {count}"
        return None


UNCONSTRAINED = CountConstraint()


@dataclass(frozen=True)
class Ready:
    """
    Readiness expectation for one field.

    Attributes:
        document_state: Reserved; declared but not evaluated
        require_visible: The element must be displayed
        text_must_contain: Text the element must contain (empty = any)
        required_css_classes: Classes the element must carry
        count: Cardinality constraint on all matches
    """

    document_state: DocumentState = DocumentState.UNINITIALIZED
    require_visible: bool = False
    text_must_contain: str = ""
    required_css_classes: FrozenSet[str] = field(default_factory=frozenset)
    count: CountConstraint = UNCONSTRAINED

    def __post_init__(self) -> None:
        # Accept any iterable of class names, but never a bare string
        classes = self.required_css_classes
        if isinstance(classes, str):
            classes = classes.split()
        object.__setattr__(
            self, "required_css_classes", frozenset(c for c in classes if c)
        )

    @classmethod
    def visible(cls, **kwargs) -> "Ready":
        return cls(require_visible=True, **kwargs)


@dataclass(frozen=True)
class Loader:
    """
    Expectation for a transient loading indicator (spinner, progress bar).

    Attributes:
        must_be_absent: The element must not be in the DOM
        must_be_invisible: The element must not be displayed
    """

    must_be_absent: bool = False
    must_be_invisible: bool = True


__all__ = [
    "DocumentState",
    "CountConstraint",
    "UNCONSTRAINED",
    "Ready",
    "Loader",
]
