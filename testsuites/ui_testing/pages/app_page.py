"""
================================================================================
Application Shell Page Objects
================================================================================

Pages of the demo shop used by the UI suites. Every page lives under
`/app` and shares the navigation bar declared by AppPage.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from uiready.framework import Loader, LocatorKind, Page, Ready

from .components import NavigationBar, OrderTable


class AppPage(Page):
    """Base for every page of the application shell."""

    def __init__(self, session):
        super().__init__(session)
        self.extend_path("/app")
        self.navigation = self.declare("navigation", NavigationBar(self), Ready.visible())


class OrdersPage(AppPage):
    """Order list at /app/orders."""

    def __init__(self, session):
        super().__init__(session)
        self.extend_path("/orders")
        self.title = self.declare(
            "title",
            self.selector("title", LocatorKind.ID),
            Ready.visible(text_must_contain="Orders"),
        )
        self.spinner = self.declare(
            "spinner", self.selector(".spinner"), loader=Loader(must_be_absent=True)
        )
        self.table = self.declare(
            "table", OrderTable(self), Ready(required_css_classes={"loaded"})
        )


class SettingsPage(AppPage):
    """Account settings at /app/settings."""

    def __init__(self, session):
        super().__init__(session)
        self.extend_path("/settings")
        self.heading = self.declare(
            "heading", self.selector("h1"), Ready.visible(text_must_contain="Settings")
        )
