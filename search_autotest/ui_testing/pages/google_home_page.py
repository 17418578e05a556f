"""
================================================================================
Google Home Page Object
================================================================================

Entry page of the search flow. `visit()` loads the page and `google_search()`
submits a query and returns the results page object.

NOTE:
  Google serves a cookie consent dialog in some regions. `dismiss_consent()`
  accepts it when present and is a no-op everywhere else.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from search_autotest.ui_testing.framework.locators import css
from search_autotest.ui_testing.framework.page_base import BasePage
from search_autotest.ui_testing.pages.google_results_page import GoogleSearchResultsPage


class GoogleHomePage(BasePage):
    """Google home page object."""

    URL_PATH = "/"

    def _bind_locators(self) -> None:
        self.search_input = css("textarea[name='q'], input[name='q']", "Search input")
        self.search_button = css("input[name='btnK'] >> visible=true", "Google Search button")
        self.consent_accept = css("button#L2AGLb", "Accept cookies button")

    @allure.step("Open Google home page")
    def visit(self) -> "GoogleHomePage":
        """Navigate to the home page and return a fresh page object for it."""
        logger.info("Navigating to Google home page.")
        self.browser.navigate(self.URL_PATH)
        home = GoogleHomePage(self.session, self.config)
        home.dismiss_consent()
        return home

    def dismiss_consent(self) -> None:
        if self.element.is_visible(self.consent_accept):
            logger.info("Accepting cookie consent dialog.")
            self.element.click(self.consent_accept)

    @allure.step("Search Google for '{search_term}'")
    def google_search(self, search_term: str) -> GoogleSearchResultsPage:
        """
        Type a search term and submit it.

        Args:
            search_term: Query to search for

        Returns:
            Results page object for the submitted query
        """
        logger.info(f"Searching for term '{search_term}' in Google search.")
        self.element.send_keys(self.search_input, search_term)
        self.element.click(self.search_button)
        return GoogleSearchResultsPage(self.session, self.config)
