"""
================================================================================
uiready
================================================================================

Page-object framework that decides when a page is ready to be driven.

Author: Automation Team
License: MIT
================================================================================
"""

__version__ = "1.0.0"
