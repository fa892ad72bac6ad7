"""
================================================================================
Readiness Validator
================================================================================

Evaluates the Ready / Loader rules declared on a Loadable (and on every
component it owns) against the live page.

Per-field evaluation order, stopping at the first violation:
    1. Presence      (Loader.must_be_absent inverts it)
    2. Visibility    (Loader.must_be_invisible inverts it)
    3. Text containment
    4. CSS class membership
    5. Cardinality

Violations are logged and attached to the Allure report; they are never
raised. Only programming errors (missing arguments, rules on unsupported
fields) raise.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from .exceptions import ElementNotFound, InvalidRuleTarget
from .loadable import Component, Loadable, RuleEntry
from .readiness import DocumentState, Loader, Ready
from .selector import Selector


class ReadinessValidator:
    """
    Walks a Loadable's rule registry and checks each declared field.

    Usage:
        >>> ReadinessValidator().validate_loadable(search_page)
        True
    """

    def validate_loadable(self, loadable: Loadable) -> bool:
        """
        Validate every rule declared on `loadable`, base layers first.

        Returns:
            False as soon as one field is not ready, True otherwise
        """
        if loadable is None:
            raise TypeError("Loadable instance cannot be None")

        for entry in loadable.rules:
            if not self.validate_entry(loadable, entry):
                logger.debug(f"{type(loadable).__name__} is not ready: '{entry.name}' failed")
                return False
        return True

    def validate_entry(self, loadable: Loadable, entry: RuleEntry) -> bool:
        """
        Validate a single registry entry.

        Raises:
            InvalidRuleTarget: If the entry targets neither a Selector nor a Component
        """
        if loadable is None:
            raise TypeError("Loadable instance cannot be None")
        if entry is None:
            raise TypeError("Rule entry cannot be None")

        target = entry.target
        if isinstance(target, Selector):
            return self.validate_selector(target, entry.ready, entry.loader)
        if isinstance(target, Component):
            return self.validate_component(target, entry.ready, entry.loader)
        raise InvalidRuleTarget(
            f"Ready and Loader rules can only be declared on Selector or Component fields; "
            f"'{entry.name}' on {type(loadable).__name__} is a {type(target).__name__}"
        )

    def validate_component(
        self,
        component: Component,
        ready: Ready,
        loader: Optional[Loader] = None,
    ) -> bool:
        """Validate a component's container, then everything the component declares."""
        if component is None:
            raise TypeError("Component instance cannot be None")
        if not self.validate_selector(component.container, ready, loader):
            return False
        return self.validate_loadable(component)

    def validate_selector(
        self,
        selector: Selector,
        ready: Ready,
        loader: Optional[Loader] = None,
    ) -> bool:
        """
        Validate one Selector against its rules.

        Args:
            selector: The field to check
            ready: Ready rule attached to the field
            loader: Loader rule attached to the field, if any

        Returns:
            True if every rule passes, False otherwise
        """
        if selector is None:
            raise TypeError("Selector instance cannot be None")
        if not selector.pattern:
            raise ValueError("Selector's locator cannot be None or empty")
        if ready is None:
            raise TypeError("Ready rule cannot be None")

        if ready.document_state is not DocumentState.UNINITIALIZED:
            # TODO: gate on ready.document_state once the driver exposes document.readyState checks
            logger.trace(f"document_state={ready.document_state.value} on {selector.locator} is not evaluated")

        try:
            violation = self._first_violation(selector, ready, loader)
        except ElementNotFound:
            violation = f"The element located by {selector.locator} disappeared during validation"

        if violation:
            self._report(violation)
            return False
        return True

    def _first_violation(
        self,
        selector: Selector,
        ready: Ready,
        loader: Optional[Loader],
    ) -> Optional[str]:
        locator = selector.locator
        present = selector.is_present()

        # Presence
        if loader is not None and loader.must_be_absent:
            if present:
                return f"The element located by {locator} is a loader that is required to be gone, but is present"
        elif not present:
            return f"The element located by {locator} must be present, but is not"

        # Nothing left to inspect on an element that is (correctly) gone
        if present:
            # Visibility
            if loader is not None and loader.must_be_invisible:
                if selector.is_displayed():
                    return f"The element located by {locator} is a loader that is required to be invisible, but is visible"
            elif ready.require_visible and not selector.is_displayed():
                return f"The element located by {locator} must be visible, but is not"

            # Text
            if ready.text_must_contain:
                text = selector.text()
                if ready.text_must_contain not in text:
                    return (
                        f"The text of the element located by {locator} does not contain the expected "
                        f"text: '{ready.text_must_contain}'. The text of the element is: '{text}'"
                    )

            # CSS classes
            if ready.required_css_classes:
                actual = selector.css_classes()
                missing = sorted(ready.required_css_classes.difference(actual))
                if missing:
                    return (
                        f"The element located by {locator} does not have all the expected CSS classes: "
                        f"{sorted(ready.required_css_classes)}. Actual: {actual}"
                    )

        # Count
        if ready.count.is_constrained:
            problem = ready.count.violation(selector.count())
            if problem:
                return f"{problem} (located by {locator})"

        return None

    def _report(self, violation: str) -> None:
        logger.warning(violation)
        allure.attach(
            violation,
            name="Readiness violation",
            attachment_type=allure.attachment_type.TEXT,
        )


__all__ = [
    "ReadinessValidator",
]
