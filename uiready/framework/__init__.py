"""
================================================================================
UI Readiness Framework
================================================================================

Core framework components for declarative page readiness on top of
Playwright.

Components:
    - Locator / LocatorKind: Immutable element lookup descriptions
    - ElementResolver: Fresh resolution, predicates and bounded polling waits
    - Selector: Locator bound to a resolver, with queries and commands
    - Ready / Loader: Readiness rules declared on page fields
    - ReadinessValidator: Evaluates rules against the live page
    - Page / Component: Page Object Model base classes
    - Store: Per-session key/value data with ${key} interpolation
    - Session / DriverEnvironment: Browser lifecycle per test

================================================================================
"""

from .config import Browser, ConfigLoader, SessionConfig
from .driver import Driver, ElementHandle, PlaywrightDriver, PlaywrightElement
from .exceptions import (
    ConfigurationError,
    ElementNotFound,
    InterpolationDepthExceeded,
    InterpolationKeyNotFound,
    InvalidRuleTarget,
    KeyNotFound,
    MissingPath,
    PredicateNoMatch,
    PredicateSourceEmpty,
    SessionClosed,
    StoreError,
    TimedOut,
    UIReadyError,
    UnsupportedComposition,
)
from .loadable import Component, Loadable, Page, RuleEntry
from .locator import Locator, LocatorKind, with_container
from .readiness import CountConstraint, DocumentState, Loader, Ready
from .resolver import ElementResolver
from .selector import Selector
from .session import DriverEnvironment, Session, open_session
from .store import Store
from .validator import ReadinessValidator

__all__ = [
    # Locators
    "Locator",
    "LocatorKind",
    "with_container",
    # Resolution
    "Driver",
    "ElementHandle",
    "PlaywrightDriver",
    "PlaywrightElement",
    "ElementResolver",
    "Selector",
    # Readiness
    "DocumentState",
    "CountConstraint",
    "Ready",
    "Loader",
    "ReadinessValidator",
    # Page objects
    "RuleEntry",
    "Loadable",
    "Page",
    "Component",
    # Session
    "Store",
    "Session",
    "DriverEnvironment",
    "open_session",
    # Configuration
    "ConfigLoader",
    "Browser",
    "SessionConfig",
    # Errors
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
