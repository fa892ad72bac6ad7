"""
================================================================================
Page Objects
================================================================================

Page and component objects for the demo shop exercised by the UI suites.

Each page class declares:
    - Its path segment (composed with its base pages)
    - Its fields, with the readiness rules they must satisfy

Author: Automation Team
License: MIT
================================================================================
"""

from .app_page import AppPage, OrdersPage, SettingsPage
from .components import NavigationBar, OrderTable

__all__ = [
    "AppPage",
    "OrdersPage",
    "SettingsPage",
    "NavigationBar",
    "OrderTable",
]
