"""
================================================================================
Google Search Results Page Object
================================================================================

Results page reached from `GoogleHomePage.google_search()`. Construction waits
for the URL to switch to the results route before checking document readiness,
so the readiness check never runs against the page being left.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from search_autotest.ui_testing.framework.locators import css
from search_autotest.ui_testing.framework.page_base import BasePage


class GoogleSearchResultsPage(BasePage):
    """Google search results page object."""

    URL_PATH = "/search"

    def _bind_locators(self) -> None:
        self.did_you_mean_section = css("p.card-section", "Did you mean section")
        self.results = css("#search", "Search results")

    def wait_for_page_load(self) -> None:
        self.browser.wait_for_url_contains(self.URL_PATH)
        super().wait_for_page_load()

    @allure.step("Get 'Did you mean' text")
    def get_did_you_mean_text(self) -> str:
        logger.info("Getting text for 'Did you mean' section.")
        return self.element.get_text(self.did_you_mean_section)

    def has_results(self) -> bool:
        return self.element.is_visible(self.results)
