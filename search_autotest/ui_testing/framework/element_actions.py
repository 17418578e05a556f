# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides the element interaction utilities page objects are
# built from. Every action waits through the wait engine before touching the
# element, so page objects never deal with timing themselves.
#
# Key Features:
#   - Dual-keyed API: every action takes a locator or a resolved handle
#   - Locators are re-resolved on every call, never cached
#   - Strict waits raise WaitTimeoutError naming the target
#   - Probes (is_present / is_visible / is_text_present) never raise
#   - Attribute reads degrade to "" plus an error log
#   - Intercepted clicks fall back to a script click
#   - Allure step integration
#
# ================================================================================

from __future__ import annotations

from typing import Any, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .conditions import (
    element_to_be_clickable,
    frame_to_be_available_and_switch_to_it,
    not_stale,
    presence_of,
    text_to_be_present_in_element,
    visibility_of,
    visible_property_of,
    visible_text_of,
)
from .exceptions import (
    ElementNotFoundError,
    HarnessError,
    InterceptedActionError,
    StaleElementError,
    WaitTimeoutError,
)
from .locators import Target, describe, is_locator
from .wait_engine import WaitEngine


class ElementActions:
    """
    Element interaction methods with built-in waiting.

    This class wraps the driver session's element operations with explicit
    wait semantics, script-click fallback and detailed logging.

    Example:
        actions = ElementActions(session)
        actions.click(css("input[name='btnK']", "Search button"))
        actions.clear_and_send_keys("textarea[name='q']", "anagram")
        if actions.is_visible("#cookie-banner"):
            ...
    """

    def __init__(self, session: Any, engine: Optional[WaitEngine] = None):
        """
        Initialize ElementActions with a driver session.

        Args:
            session: DriverSession the actions run against
            engine: Wait engine (a default-policy engine is built if omitted)
        """
        self.session = session
        self.wait = engine or WaitEngine(session)

    # =========================================================================
    # Strict waits
    # =========================================================================

    @allure.step("Wait for visible: {target}")
    def wait_for_visible(self, target: Target, timeout: Optional[float] = None) -> Any:
        """
        Wait for the element to be visible.

        Args:
            target: Locator, selector string or element handle
            timeout: Override for the default timeout in seconds

        Returns:
            The visible element handle

        Raises:
            WaitTimeoutError: The element did not become visible in time
            StaleElementError: A handle target went stale
        """
        try:
            return self.wait.until(visibility_of(target), timeout=timeout)
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out waiting for visibility of element: {describe(target)}"
            ) from e

    @allure.step("Wait for clickable: {target}")
    def wait_for_clickable(self, target: Target, timeout: Optional[float] = None) -> Any:
        """
        Wait for the element to be visible and enabled.

        Returns:
            The clickable element handle
        """
        try:
            return self.wait.until(element_to_be_clickable(target), timeout=timeout)
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out waiting for element to be clickable: {describe(target)}"
            ) from e

    @allure.step("Wait for text '{text}' in: {target}")
    def wait_for_text_to_be_present(
        self,
        target: Target,
        text: str,
        timeout: Optional[float] = None,
    ) -> None:
        try:
            self.wait.until(text_to_be_present_in_element(target, text), timeout=timeout)
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out waiting for text to be present in element: {describe(target)}"
            ) from e

    @allure.step("Switch to frame: {target}")
    def wait_for_frame_and_switch_to_it(
        self,
        target: Target,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Wait for a frame element's document and switch the session into it.

        The switch is not reverted; call
        `session.switch_to_default_content()` to return to the top document.

        Returns:
            The frame the session switched into
        """
        try:
            return self.wait.until(
                frame_to_be_available_and_switch_to_it(target), timeout=timeout
            )
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out switching to frame: {describe(target)}"
            ) from e

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Click element: {target}")
    def click(self, target: Target) -> None:
        """
        Wait for the element to be clickable and click it.

        If another element intercepts the native click, the click is repeated
        once through JavaScript and the interception is only logged.
        """
        logger.info(f"Clicking element: {describe(target)}")

        self.wait_for_visible(target)
        handle = self.wait_for_clickable(target)
        try:
            self.session.click(handle)
        except InterceptedActionError:
            logger.warning("Element click intercepted, trying JS click.")
            self.click_with_js(target)

        logger.debug(f"Successfully clicked: {describe(target)}")

    @allure.step("Click element with JS: {target}")
    def click_with_js(self, target: Target) -> None:
        handle = self.wait_for_clickable(target)
        self.session.execute_script("el => el.click()", handle)

    @allure.step("Send keys to: {target}")
    def send_keys(self, target: Target, *keys: str) -> None:
        """
        Wait for the element to be visible and type the given keys into it.

        Args:
            target: Locator, selector string or element handle
            *keys: Character sequences typed in order
        """
        text = "".join(keys)
        logger.info(f"Typing into: {describe(target)}")

        handle = self.wait_for_visible(target)
        self.session.send_keys(handle, text)

    @allure.step("Clear and send keys to: {target}")
    def clear_and_send_keys(self, target: Target, *keys: str) -> None:
        """Wait for the element to be visible, clear it, then type the keys."""
        text = "".join(keys)
        logger.info(f"Replacing value of: {describe(target)}")

        handle = self.wait_for_visible(target)
        self.session.clear(handle)
        self.session.send_keys(handle, text)

    @allure.step("Select option '{text}' in: {target}")
    def select_option_by_visible_text(self, target: Target, text: str) -> None:
        """
        Select a dropdown option whose visible text matches exactly.

        Raises:
            ElementNotFoundError: No option carries the given text
        """
        handle = self.wait_for_visible(target)
        options = self.session.execute_script(
            "el => Array.from(el.options || []).map(o => o.text)", handle
        ) or []
        if text not in options:
            raise ElementNotFoundError(
                f"Cannot locate option with text '{text}' in: {describe(target)}"
            )
        self.session.select_option(handle, options.index(text))
        logger.debug(f"Selected option '{text}' in {describe(target)}")

    @allure.step("Scroll into view: {target}")
    def scroll_into_view(self, target: Target) -> None:
        """Scroll the element into view if it is present; otherwise log and skip."""
        handle = self._find_present(target)
        if handle is None:
            return
        try:
            self.session.execute_script("el => el.scrollIntoView(true)", handle)
        except (HarnessError, PlaywrightError) as e:
            logger.error(f"Could not scroll element into view: {e}")

    @allure.step("Move to element: {target}")
    def move_to_element(self, target: Target) -> None:
        """Hover the element if it is present; otherwise log and skip."""
        handle = self._find_present(target)
        if handle is None:
            return
        self.session.hover(handle)

    # =========================================================================
    # Probes
    # =========================================================================

    def is_present(self, target: Target, timeout: Optional[float] = None) -> bool:
        """
        Check if the element exists (a handle: is still attached).

        Args:
            target: Locator, selector string or element handle
            timeout: Override for the probe timeout in seconds

        Returns:
            True if present, False otherwise
        """
        condition = presence_of(target) if is_locator(target) else not_stale(target)
        return self._probe(condition, timeout)

    def is_visible(self, target: Target, timeout: Optional[float] = None) -> bool:
        """Check if the element is visible within the probe timeout."""
        return self._probe(visibility_of(target), timeout)

    def is_text_present(
        self,
        target: Target,
        text: str,
        timeout: Optional[float] = None,
    ) -> bool:
        """Check if the element contains the given text within the probe timeout."""
        return self._probe(text_to_be_present_in_element(target, text), timeout)

    # =========================================================================
    # Reads
    # =========================================================================

    @allure.step("Get text: {target}")
    def get_text(self, target: Target) -> str:
        """Wait for the element to be visible and return its rendered text."""
        (text,) = self._read_visible(visible_text_of(target), target)

        logger.debug(f"Got text from {describe(target)}: '{text}'")
        return text

    def get_value(self, target: Target) -> str:
        """Wait for the element to be visible and return its current value."""
        (value,) = self._read_visible(visible_property_of(target, "value"), target)
        return "" if value is None else str(value)

    def _read_visible(self, condition: Any, target: Target) -> tuple:
        try:
            return self.wait.until(condition)
        except WaitTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out waiting for visibility of element: {describe(target)}"
            ) from e

    @allure.step("Get attribute {attribute} from: {target}")
    def get_attribute(self, target: Target, attribute: str) -> str:
        """
        Read an attribute.

        Returns an empty string (and logs an error) if the element cannot be
        located, and an empty string if the attribute is absent.
        """
        handle = self._find_present(target)
        if handle is None:
            return ""
        try:
            value = self.session.get_attribute(handle, attribute)
        except StaleElementError:
            logger.error(f"Unable to read '{attribute}', element went stale: {describe(target)}")
            return ""

        logger.debug(f"Got attribute {attribute} from {describe(target)}: '{value}'")
        return value or ""

    def get_href(self, target: Target) -> str:
        return self.get_attribute(target, "href")

    def get_content_attribute(self, target: Target) -> str:
        return self.get_attribute(target, "content")

    def get_inner_text(self, target: Target) -> str:
        handle = self._find_present(target)
        if handle is None:
            return ""
        try:
            value = self.session.get_property(handle, "innerText")
        except StaleElementError:
            logger.error(f"Unable to read innerText, element went stale: {describe(target)}")
            return ""
        return value or ""

    # =========================================================================
    # Internals
    # =========================================================================

    def _probe(self, condition: Any, timeout: Optional[float]) -> bool:
        try:
            self.wait.until(condition, policy="probe", timeout=timeout)
            return True
        except (WaitTimeoutError, StaleElementError):
            return False

    def _find_present(self, target: Target) -> Optional[Any]:
        """Handle for a present element, or None after logging an error."""
        try:
            return self.wait.until(presence_of(target), policy="probe")
        except (WaitTimeoutError, StaleElementError):
            logger.error(f"Unable to locate element: {describe(target)}")
            return None


__all__ = [
    "ElementActions",
]
