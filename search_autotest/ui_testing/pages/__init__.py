"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Google search flow.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Transitions to the next page object

Author: Automation Team
License: MIT
================================================================================
"""

from .google_results_page import GoogleSearchResultsPage
from .google_home_page import GoogleHomePage

__all__ = [
    "GoogleHomePage",
    "GoogleSearchResultsPage",
]
