"""
================================================================================
Locator
================================================================================

Immutable description of how to find zero or more elements on a page.

A Locator is a (pattern, kind) pair. It never holds on to a resolved element:
every query goes back through the driver so DOM mutations between steps do
not leave tests holding stale references.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import UnsupportedComposition


class LocatorKind(Enum):
    """How the pattern of a Locator is interpreted by the driver."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    LINK_TEXT = "link_text"
    PARTIAL_LINK_TEXT = "partial_link_text"
    TAG_NAME = "tag_name"
    CLASS_NAME = "class_name"


@dataclass(frozen=True)
class Locator:
    """
    Pattern + kind pair identifying UI elements.

    Attributes:
        pattern: The selector text (CSS selector, XPath expression, id, ...)
        kind: How `pattern` should be interpreted

    Usage:
        >>> Locator("#login")
        Locator(pattern='#login', kind=<LocatorKind.CSS: 'css'>)
        >>> Locator("//button", LocatorKind.XPATH)
    """

    pattern: str
    kind: LocatorKind = LocatorKind.CSS

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ValueError("A locator pattern cannot be None or empty")
        if not isinstance(self.kind, LocatorKind):
            raise TypeError(f"Locator kind must be a LocatorKind, got {self.kind!r}")

    def within(self, child_pattern: str) -> "Locator":
        """Build a child CSS locator scoped to this (container) locator."""
        return with_container(self, child_pattern)

    def __str__(self) -> str:
        return f"{self.kind.name}('{self.pattern}')"


def with_container(container: Locator, child_pattern: str) -> Locator:
    """
    Create a CSS locator for `child_pattern` nested inside `container`.

    Only CSS containers are supported; the resulting pattern is the
    container's (trimmed) pattern and the child pattern joined by a space.

    Args:
        container: CSS locator of the enclosing element
        child_pattern: CSS pattern of the element inside the container

    Returns:
        New CSS Locator

    Raises:
        UnsupportedComposition: If `container` is not a CSS locator
    """
    if container.kind is not LocatorKind.CSS:
        raise UnsupportedComposition(
            "Containers only support CSS selectors for locators, "
            f"the container supplied uses: '{container.kind.name}'"
        )
    return Locator(f"{container.pattern.strip()} {child_pattern}", LocatorKind.CSS)


__all__ = [
    "LocatorKind",
    "Locator",
    "with_container",
]
