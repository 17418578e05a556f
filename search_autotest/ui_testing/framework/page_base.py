"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Element and browser actions bound to the driver session
    - Explicit locator binding in `_bind_locators()`
    - Load-completion wait before the constructor returns
    - Screenshot utility

Page objects are constructed fresh on every navigation. Actions that move to
another page return a new page object; an old instance must not be used after
the page it modelled has been left.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import allure
from loguru import logger

from .browser_actions import BrowserActions
from .config_loader import HarnessConfig
from .element_actions import ElementActions
from .wait_engine import WaitEngine


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parents[3] / "reports" / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class SearchPage(BasePage):
            URL_PATH = "/search"

            def _bind_locators(self) -> None:
                self.results = css("#search", "Results")

            def result_text(self) -> str:
                return self.element.get_text(self.results)
    """

    # Override in subclasses
    URL_PATH: str = "/"

    def __init__(self, session: Any, config: HarnessConfig):
        """
        Initialize page object and wait for the page to finish loading.

        Args:
            session: DriverSession the page is displayed in
            config: Harness configuration (base URL, timeouts)
        """
        self.session = session
        self.config = config

        engine = WaitEngine(session, policies=config.timeouts.policies())
        self.element = ElementActions(session, engine)
        self.browser = BrowserActions(session, config.base_url, engine)

        self._bind_locators()
        self.wait_for_page_load()

    def _bind_locators(self) -> None:
        """Declare the page's ElementLocator attributes."""

    def wait_for_page_load(self) -> None:
        """Page-specific load-completion wait. Defaults to document readiness."""
        self.browser.wait_for_js_to_load()

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.config.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.browser.get_current_url()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot(self, name: str, attach_to_allure: bool = True) -> Path:
        """
        Take a full-page screenshot and optionally attach it to Allure.

        Args:
            name: Screenshot name (without extension)
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        png = self.session.screenshot(full_page=True)
        filepath.write_bytes(png)

        if attach_to_allure:
            allure.attach(
                png,
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
]
