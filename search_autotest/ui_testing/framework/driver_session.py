"""
================================================================================
Driver Session
================================================================================

Handle to one running browser page, created per test and disposed after it.

The session exposes the small capability set the rest of the framework is
built on (navigate, find, read, click, type, run script, switch frame) and
tracks the current interaction context. Frame switches are a side effect on
the session and stay in place until `switch_to_default_content()` is called.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from loguru import logger
from playwright.sync_api import ElementHandle, Frame, Page
from playwright.sync_api import Error as PlaywrightError

from .exceptions import (
    ElementNotFoundError,
    StaleElementError,
    translate_playwright_error,
)
from .locators import ElementLocator, describe


_NAVIGATION_MARKERS = ("execution context was destroyed", "frame was detached")


class DriverSession:
    """
    Live connection to one controlled browser page.

    Usage:
        session = DriverSession(page)
        session.navigate("https://www.google.com/")
        handle = session.find_element(css("textarea[name='q']"))
        session.send_keys(handle, "anagram")
    """

    def __init__(
        self,
        page: Page,
        on_quit: Optional[Callable[[], None]] = None,
        native_click_timeout: float = 2.0,
    ):
        """
        Initialize driver session.

        Args:
            page: Playwright Page object owned by this session
            on_quit: Callback disposing the browser resources behind the page
            native_click_timeout: Seconds a native click may spend on
                Playwright's own actionability checks before failing
        """
        self.page = page
        self.native_click_timeout = native_click_timeout
        self._on_quit = on_quit
        self._frame: Optional[Frame] = None
        self._quit = False

    # =========================================================================
    # Context
    # =========================================================================

    @property
    def context(self) -> Frame:
        """Frame that element lookups and scripts currently run against."""
        return self._frame or self.page.main_frame

    @property
    def in_frame(self) -> bool:
        return self._frame is not None

    def switch_to_frame(self, frame_element: ElementHandle) -> Frame:
        """
        Switch the interaction context into a frame element's document.

        Raises:
            ElementNotFoundError: The frame document is not available yet
            StaleElementError: The frame element is detached
        """
        try:
            frame = frame_element.content_frame()
        except PlaywrightError as e:
            raise translate_playwright_error(e, frame_element) from e
        if frame is None:
            raise ElementNotFoundError(
                f"Frame is not available: {describe(frame_element)}"
            )
        self._frame = frame
        logger.debug(f"Switched to frame: {frame.url}")
        return frame

    def switch_to_default_content(self) -> None:
        """Return the interaction context to the top-level document."""
        self._frame = None
        logger.debug("Switched to default content")

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str) -> None:
        self.page.goto(url, wait_until="domcontentloaded")
        self._frame = None

    def refresh(self) -> None:
        self.page.reload(wait_until="domcontentloaded")
        self._frame = None

    def get_current_url(self) -> str:
        return self.page.url

    # =========================================================================
    # Elements
    # =========================================================================

    def find_element(self, locator: ElementLocator) -> ElementHandle:
        """
        Resolve a locator to a handle in the current context.

        Raises:
            ElementNotFoundError: Nothing matches the locator right now
        """
        try:
            handle = self.context.query_selector(locator.selector)
        except PlaywrightError as e:
            # Document is being replaced; the element may exist once it settles
            if any(marker in str(e).lower() for marker in _NAVIGATION_MARKERS):
                raise ElementNotFoundError(
                    f"Page is navigating, unable to locate element: {locator}"
                ) from e
            raise
        if handle is None:
            raise ElementNotFoundError(f"Unable to locate element: {locator}")
        return handle

    def find_elements(self, locator: ElementLocator) -> List[ElementHandle]:
        return self.context.query_selector_all(locator.selector)

    def is_stale(self, handle: ElementHandle) -> bool:
        """True if the handle no longer points at a node in the live DOM."""
        try:
            return not handle.evaluate("el => el.isConnected")
        except PlaywrightError:
            return True

    def ensure_attached(self, handle: ElementHandle) -> ElementHandle:
        if self.is_stale(handle):
            raise StaleElementError(
                f"Element is no longer attached to the page: {describe(handle)}"
            )
        return handle

    def get_attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        try:
            return handle.get_attribute(name)
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def get_property(self, handle: ElementHandle, name: str) -> Any:
        """Read a DOM property (value, innerText, ...) rather than an attribute."""
        try:
            return handle.evaluate("(el, name) => el[name]", name)
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def get_text(self, handle: ElementHandle) -> str:
        try:
            return handle.inner_text()
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def click(self, handle: ElementHandle) -> None:
        """
        Native click.

        Raises:
            InterceptedActionError: Another element would receive the click
            StaleElementError: The handle went stale
        """
        try:
            handle.click(timeout=self.native_click_timeout * 1000)
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def clear(self, handle: ElementHandle) -> None:
        try:
            handle.fill("")
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def send_keys(self, handle: ElementHandle, text: str) -> None:
        try:
            handle.type(text)
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def select_option(self, handle: ElementHandle, index: int) -> List[str]:
        """Select the option at `index` among the element's options."""
        try:
            return handle.select_option(index=index)
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    def hover(self, handle: ElementHandle) -> None:
        try:
            handle.hover()
        except PlaywrightError as e:
            raise translate_playwright_error(e, handle) from e

    # =========================================================================
    # Scripts and diagnostics
    # =========================================================================

    def execute_script(self, script: str, arg: Any = None) -> Any:
        """
        Evaluate a JavaScript expression or function in the current context.

        Args:
            script: Expression, or function taking a single argument
            arg: Argument passed to the function (element handles allowed)
        """
        return self.context.evaluate(script, arg)

    def screenshot(self, full_page: bool = True) -> bytes:
        return self.page.screenshot(full_page=full_page)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._quit

    def quit(self) -> None:
        """Dispose the browser behind this session. Safe to call twice."""
        if self._quit:
            return
        self._quit = True
        if self._on_quit is not None:
            self._on_quit()


__all__ = [
    "DriverSession",
]
