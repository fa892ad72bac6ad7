"""
================================================================================
Framework Exceptions
================================================================================

Error taxonomy shared by the resolution layer, the readiness validator,
the session store and the configuration layer.

Resolution errors (ElementNotFound, PredicateNoMatch, PredicateSourceEmpty)
are recoverable and may be retried. Composition and rule-target errors are
programming mistakes and should be fixed at the call site. Readiness
validation failures are never raised - `is_ready()` returns False instead.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional, Tuple


class UIReadyError(Exception):
    """Base class for all framework errors."""
    pass


# =============================================================================
# Element Resolution
# =============================================================================

class ElementNotFound(UIReadyError):
    """Raised when a locator resolves to zero elements."""

    def __init__(self, locator, message: Optional[str] = None):
        self.locator = locator
        super().__init__(message or f"No element found for {locator}")


class PredicateSourceEmpty(UIReadyError):
    """Raised when a predicate search had no elements to test at all."""

    def __init__(self, locator, predicate=None):
        self.locator = locator
        self.predicate = predicate
        super().__init__(
            f"Could not test predicate {predicate!r}: no elements found for {locator}"
        )


class PredicateNoMatch(UIReadyError):
    """Raised when elements were found but none satisfied the predicate."""

    def __init__(self, locator, predicate=None, candidates: int = 0):
        self.locator = locator
        self.predicate = predicate
        self.candidates = candidates
        super().__init__(
            f"None of the {candidates} element(s) found for {locator} "
            f"satisfy the predicate {predicate!r}"
        )


class TimedOut(UIReadyError):
    """
    Raised when a wait exhausts its timeout.

    Attributes:
        cause: The last ElementNotFound seen while waiting, or None when the
            element was always found but never satisfied the condition.
    """

    def __init__(self, message: str, cause: Optional[ElementNotFound] = None):
        self.cause = cause
        super().__init__(message)


class UnsupportedComposition(UIReadyError):
    """Raised when composing locators across unsupported kinds."""
    pass


# =============================================================================
# Readiness Rules
# =============================================================================

class InvalidRuleTarget(UIReadyError):
    """Raised when a readiness rule is attached to something that cannot be validated."""
    pass


# =============================================================================
# Session / Store
# =============================================================================

class StoreError(UIReadyError):
    """Base class for Store lookup and interpolation failures."""
    pass


class KeyNotFound(StoreError, KeyError):
    """Raised when a key is absent from the Store (or is empty)."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Invalid key: {key!r}")

    def __str__(self) -> str:
        return self.args[0]


class InterpolationKeyNotFound(StoreError):
    """Raised when a ${placeholder} cannot be resolved from the Store."""

    def __init__(self, placeholder: str, key: str):
        self.placeholder = placeholder
        self.key = key
        super().__init__(
            f"Attempted to interpolate '{placeholder}' but a match was not found in the store"
        )


class InterpolationDepthExceeded(StoreError):
    """Raised when store values refer back to themselves or nest too deeply."""

    def __init__(self, template: str, max_depth: int, chain: Tuple[str, ...] = ()):
        self.template = template
        self.max_depth = max_depth
        self.chain = tuple(chain)
        if chain and chain[-1] in chain[:-1]:
            reason = "store values refer back to themselves"
        else:
            reason = f"store values nest more than {max_depth} levels deep"
        path = " -> ".join(self.chain)
        super().__init__(f"Could not interpolate {template!r}: {reason} ({path})")


class SessionClosed(UIReadyError):
    """Raised when a closed Session or DriverEnvironment is used."""
    pass


class MissingPath(UIReadyError):
    """Raised when a Page has no path segment declared."""
    pass


class ConfigurationError(UIReadyError):
    """Raised when configuration loading or access fails."""
    pass


__all__ = [
    "UIReadyError",
    "ElementNotFound",
    "PredicateSourceEmpty",
    "PredicateNoMatch",
    "TimedOut",
    "UnsupportedComposition",
    "InvalidRuleTarget",
    "StoreError",
    "KeyNotFound",
    "InterpolationKeyNotFound",
    "InterpolationDepthExceeded",
    "SessionClosed",
    "MissingPath",
    "ConfigurationError",
]
