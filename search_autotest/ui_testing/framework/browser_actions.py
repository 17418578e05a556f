"""
================================================================================
Browser Actions
================================================================================

Page-level browser operations: navigation relative to the configured base URL,
refresh, current URL and document readiness.

Readiness waits use the `page_load` wait policy, separate from element waits.
A page that never reports `complete` is logged, not failed; the element waits
that follow decide whether the page is usable.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .conditions import document_ready
from .exceptions import HarnessError
from .wait_engine import WaitCondition, WaitEngine


class BrowserActions:
    """
    Browser-level helpers bound to one driver session.

    Usage:
        browser = BrowserActions(session, base_url="https://www.google.com")
        browser.navigate("/")
        assert "google" in browser.get_current_url()
    """

    def __init__(
        self,
        session: Any,
        base_url: str,
        engine: Optional[WaitEngine] = None,
    ):
        """
        Initialize browser actions.

        Args:
            session: DriverSession the actions run against
            base_url: Base URL that navigation paths are appended to
            engine: Wait engine (a default-policy engine is built if omitted)
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.wait = engine or WaitEngine(session)

    def navigate(self, path: str = "/") -> None:
        """
        Load a path under the base URL and wait for scripts to finish loading.

        Args:
            path: URL path, e.g. "/" or "/search?q=test"
        """
        url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {url}"):
            logger.info(f"Loading URL: {url}")
            self.session.navigate(url)
            self.wait_for_js_to_load()

    @allure.step("Refresh page")
    def refresh(self) -> None:
        logger.info("Refreshing the page.")
        self.session.refresh()
        self.wait_for_js_to_load()

    def get_current_url(self) -> str:
        return self.session.get_current_url()

    def wait_for_url_contains(self, fragment: str, timeout: Optional[float] = None) -> str:
        """
        Wait until the current URL contains the given fragment.

        Raises:
            WaitTimeoutError: The URL did not change in time
        """
        condition = WaitCondition(
            lambda session: fragment in (session.get_current_url() or ""),
            f"URL to contain '{fragment}'",
        )
        self.wait.until(condition, policy="page_load", timeout=timeout)
        return self.get_current_url()

    def pause(self, milliseconds: int) -> None:
        """Unconditional sleep. Prefer a wait condition where one exists."""
        logger.info(f"Waiting for {milliseconds} milliseconds.")
        time.sleep(milliseconds / 1000)

    def wait_for_js_to_load(self) -> bool:
        """
        Wait for document.readyState to reach 'complete'.

        Returns:
            True if the document became ready, False if it did not (logged)
        """
        try:
            self.wait.until(document_ready(), policy="page_load")
            return True
        except (HarnessError, PlaywrightError) as e:
            logger.error(
                f"JavaScript may have failed to load for {self.get_current_url()}: {e}"
            )
            return False


__all__ = [
    "BrowserActions",
]
