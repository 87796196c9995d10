"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific workflows

Author: Automation Team
License: MIT
================================================================================
"""

from .search_result_page import SearchResultPage

__all__ = [
    "SearchResultPage",
]
