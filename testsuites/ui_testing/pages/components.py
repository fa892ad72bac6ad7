"""
================================================================================
Shared Components
================================================================================

Component objects reused across the demo application's pages.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from uiready.framework import Component, CountConstraint, LocatorKind, Ready, Selector


class NavigationBar(Component):
    """Main navigation bar; ready once it holds at least one link."""

    def __init__(self, owner, container="nav.main"):
        super().__init__(owner, container)
        self.links = self.declare(
            "links", self.within("a"), Ready(count=CountConstraint.between(at_least=1))
        )

    def link(self, label: str) -> Selector:
        return self.selector(label, LocatorKind.LINK_TEXT)

    def labels(self) -> List[str]:
        return [element.get_text() for element in self.links.get_multiple()]


class OrderTable(Component):
    """
    Orders table.

    Rows are rendered asynchronously, so the table only counts as ready
    once at least one row exists.
    """

    def __init__(self, owner, container="table.orders"):
        super().__init__(owner, container)
        self.rows = self.declare(
            "rows", self.within("tr.order-row"), Ready(count=CountConstraint.between(at_least=1))
        )

    def order_ids(self) -> List[str]:
        return [row.get_text() for row in self.rows.get_multiple()]

    @allure.step("Open order {order_id}")
    def open_order(self, order_id: str) -> None:
        self.rows.get_where(lambda row: row.get_text() == order_id).click()
