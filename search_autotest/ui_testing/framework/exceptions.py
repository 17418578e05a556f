"""
================================================================================
Harness Exceptions
================================================================================

Error taxonomy shared by the wait engine, element actions and page objects.

    - WaitTimeoutError: a wait condition never became true within its budget
    - ElementNotFoundError: transient, retried while polling
    - InterceptedActionError: click target obscured by another element
    - StaleElementError: resolved handle no longer attached to the page
    - ConfigurationError: invalid or missing harness configuration

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError


class HarnessError(Exception):
    """Base class for all harness errors."""
    pass


class WaitTimeoutError(HarnessError, TimeoutError):
    """Raised when a wait condition is not satisfied before its timeout."""
    pass


class ElementNotFoundError(HarnessError):
    """Raised when a locator matches no element in the current context."""
    pass


class InterceptedActionError(HarnessError):
    """Raised when a native click lands on an overlapping element."""
    pass


class StaleElementError(HarnessError):
    """Raised when an element handle is no longer attached to the DOM."""
    pass


class ConfigurationError(HarnessError):
    """Raised when configuration loading or access fails."""
    pass


# Fragments of Playwright error messages, lower-cased
_INTERCEPTED_MARKERS = ("intercepts pointer events", "other element would receive the click")
_STALE_MARKERS = ("not attached to the dom", "element is detached", "target closed")


def translate_playwright_error(exc: Exception, target: Any = None) -> Exception:
    """
    Map a Playwright error onto the harness taxonomy.

    Errors that do not match a known category are returned unchanged so the
    caller can re-raise the original.

    Args:
        exc: Exception raised by a Playwright call
        target: Locator or handle the call was made against (for messages)

    Returns:
        Harness exception, or ``exc`` itself when no mapping applies
    """
    if not isinstance(exc, PlaywrightError):
        return exc

    message = str(exc).lower()
    if any(marker in message for marker in _INTERCEPTED_MARKERS):
        return InterceptedActionError(f"Click intercepted on element: {target}")
    if any(marker in message for marker in _STALE_MARKERS):
        return StaleElementError(f"Element is no longer attached to the page: {target}")
    if isinstance(exc, PlaywrightTimeoutError):
        return WaitTimeoutError(f"Browser operation timed out on element: {target}")
    return exc


__all__ = [
    "HarnessError",
    "WaitTimeoutError",
    "ElementNotFoundError",
    "InterceptedActionError",
    "StaleElementError",
    "ConfigurationError",
    "translate_playwright_error",
]
