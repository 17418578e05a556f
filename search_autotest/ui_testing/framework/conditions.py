"""
================================================================================
Wait Conditions
================================================================================

Ready-made conditions for the wait engine.

Every element condition accepts either a locator (re-resolved on each poll)
or a resolved handle (checked for staleness on each poll). A missing element
raises ElementNotFoundError, which the wait engine treats as "not yet"; a
stale handle raises StaleElementError, which ends the wait immediately.

A locator's element that is re-rendered between lookup and check is treated
as not found for that poll, so the next poll picks up the new node.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from playwright.sync_api import Error as PlaywrightError

from .exceptions import ElementNotFoundError, StaleElementError, translate_playwright_error
from .locators import Target, as_locator, describe, is_locator
from .wait_engine import WaitCondition


def resolve(session: Any, target: Target) -> Any:
    """Fresh handle for a locator, or the handle itself if still attached."""
    if is_locator(target):
        return session.find_element(as_locator(target))
    return session.ensure_attached(target)


def on_element(
    target: Target,
    check: Callable[[Any, Any], Any],
    description: str,
) -> WaitCondition:
    """
    Condition resolving the target and applying `check(session, handle)`.

    Playwright errors raised by the check are mapped onto the harness
    taxonomy. Staleness is fatal for a handle and "not yet" for a locator.
    """
    def _poll(session: Any) -> Any:
        handle = resolve(session, target)
        try:
            try:
                return check(session, handle)
            except PlaywrightError as e:
                error = translate_playwright_error(e, describe(target))
                if error is e:
                    raise
                raise error from e
        except StaleElementError as e:
            if not is_locator(target):
                raise
            raise ElementNotFoundError(
                f"Element was re-rendered, looking it up again: {describe(target)}"
            ) from e

    return WaitCondition(_poll, description)


def presence_of(target: Target) -> WaitCondition:
    return WaitCondition(
        lambda session: resolve(session, target),
        f"presence of element: {describe(target)}",
    )


def not_stale(handle: Any) -> WaitCondition:
    """Handle still attached to the live DOM (never raises for stale handles)."""
    return WaitCondition(
        lambda session: not session.is_stale(handle),
        f"element to stay attached: {describe(handle)}",
    )


def visibility_of(target: Target) -> WaitCondition:
    return on_element(
        target,
        lambda session, handle: handle if handle.is_visible() else None,
        f"visibility of element: {describe(target)}",
    )


def element_to_be_clickable(target: Target) -> WaitCondition:
    def _clickable(session: Any, handle: Any) -> Any:
        if handle.is_visible() and handle.is_enabled():
            return handle
        return None

    return on_element(target, _clickable, f"element to be clickable: {describe(target)}")


def text_to_be_present_in_element(target: Target, text: str) -> WaitCondition:
    return on_element(
        target,
        lambda session, handle: text in (session.get_text(handle) or ""),
        f"text '{text}' to be present in element: {describe(target)}",
    )


def visible_text_of(target: Target) -> WaitCondition:
    """
    Rendered text of the element once it is visible.

    The result is a one-item tuple so that empty text still satisfies the wait.
    """
    def _read(session: Any, handle: Any) -> Optional[tuple]:
        if not handle.is_visible():
            return None
        return (session.get_text(handle),)

    return on_element(target, _read, f"visibility of element: {describe(target)}")


def visible_property_of(target: Target, name: str) -> WaitCondition:
    """DOM property of the element once it is visible, as a one-item tuple."""
    def _read(session: Any, handle: Any) -> Optional[tuple]:
        if not handle.is_visible():
            return None
        return (session.get_property(handle, name),)

    return on_element(target, _read, f"visibility of element: {describe(target)}")


def frame_to_be_available_and_switch_to_it(target: Target) -> WaitCondition:
    return on_element(
        target,
        lambda session, handle: session.switch_to_frame(handle),
        f"frame to be available: {describe(target)}",
    )


def document_ready() -> WaitCondition:
    return WaitCondition(
        lambda session: session.execute_script("() => document.readyState === 'complete'"),
        "document.readyState to be 'complete'",
    )


def script_returns_truthy(script: str, arg: Any = None) -> WaitCondition:
    return WaitCondition(
        lambda session: session.execute_script(script, arg),
        f"script to return a truthy value: {script}",
    )


__all__ = [
    "resolve",
    "on_element",
    "presence_of",
    "not_stale",
    "visibility_of",
    "element_to_be_clickable",
    "text_to_be_present_in_element",
    "visible_text_of",
    "visible_property_of",
    "frame_to_be_available_and_switch_to_it",
    "document_ready",
    "script_returns_truthy",
]
