"""
In-memory stand-ins for the browser used by the framework unit tests.

FakeSession implements the DriverSession capability set over a dict of
selector -> FakeElement, and FakeClock lets wait tests run without sleeping.
"""

from typing import Any, Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError

from search_autotest.ui_testing.framework.exceptions import (
    ElementNotFoundError,
    StaleElementError,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeElement:
    def __init__(
        self,
        name: str = "element",
        visible: bool = True,
        enabled: bool = True,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        value: str = "",
        options: Optional[List[str]] = None,
        frame: Any = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.visible = visible
        self.enabled = enabled
        self.text = text
        self.attributes = attributes or {}
        self.value = value
        self.options = options or []
        self.frame = frame
        self.on_click = on_click
        self.attached = True
        self.detach_when_resolved = False
        self.click_error: Optional[Exception] = None

        self.native_clicks = 0
        self.js_clicks = 0
        self.cleared = 0
        self.typed: List[str] = []
        self.selected: Optional[str] = None
        self.selected_index: Optional[int] = None
        self.hovered = False
        self.scrolled = False

    def is_visible(self) -> bool:
        return self.visible

    def is_enabled(self) -> bool:
        if not self.attached:
            raise PlaywrightError("Element is not attached to the DOM")
        return self.enabled

    def __repr__(self) -> str:
        return f"FakeElement({self.name})"


class FakeSession:
    def __init__(self, clock: Optional[FakeClock] = None):
        self.clock = clock
        self.elements: Dict[str, FakeElement] = {}
        self.appear_at: Dict[str, float] = {}
        self.url = "about:blank"
        self.ready = True
        self.frame: Any = None
        self.scripts: List[str] = []
        self.find_calls = 0
        self.stale_first: Dict[str, FakeElement] = {}
        self.refreshes = 0
        self.closed = False

    def add(self, selector: str, element: FakeElement, appear_at: Optional[float] = None) -> FakeElement:
        self.elements[selector] = element
        if appear_at is not None:
            self.appear_at[selector] = appear_at
        return element

    def rerender(self, selector: str, old: FakeElement, new: FakeElement) -> FakeElement:
        """Replace the node; the next lookup still returns `old`, which then detaches."""
        self.elements[selector] = new
        self.stale_first[selector] = old
        old.detach_when_resolved = True
        return new

    # -- capability set ------------------------------------------------------

    def find_element(self, locator):
        self.find_calls += 1
        element = self.stale_first.pop(locator.selector, None) or self.elements.get(locator.selector)
        appear_at = self.appear_at.get(locator.selector)
        if appear_at is not None and self.clock is not None and self.clock.now < appear_at:
            element = None
        if element is None or not element.attached:
            raise ElementNotFoundError(f"Unable to locate element: {locator}")
        self._detach_if_rerendered(element)
        return element

    def is_stale(self, handle) -> bool:
        return not handle.attached

    def ensure_attached(self, handle):
        if not handle.attached:
            raise StaleElementError(f"Element is no longer attached to the page: {handle!r}")
        self._detach_if_rerendered(handle)
        return handle

    def _detach_if_rerendered(self, element: FakeElement) -> None:
        if element.detach_when_resolved:
            element.detach_when_resolved = False
            element.attached = False

    def get_text(self, handle) -> str:
        return self.ensure_attached(handle).text

    def get_attribute(self, handle, name):
        return self.ensure_attached(handle).attributes.get(name)

    def get_property(self, handle, name):
        handle = self.ensure_attached(handle)
        return {"value": handle.value, "innerText": handle.text}.get(name)

    def click(self, handle) -> None:
        handle = self.ensure_attached(handle)
        handle.native_clicks += 1
        if handle.click_error is not None:
            raise handle.click_error
        if handle.on_click is not None:
            handle.on_click()

    def clear(self, handle) -> None:
        handle = self.ensure_attached(handle)
        handle.value = ""
        handle.cleared += 1

    def send_keys(self, handle, text: str) -> None:
        handle = self.ensure_attached(handle)
        handle.value += text
        handle.typed.append(text)

    def select_option(self, handle, index: int):
        handle = self.ensure_attached(handle)
        handle.selected_index = index
        handle.selected = handle.options[index]
        return [handle.selected]

    def hover(self, handle) -> None:
        self.ensure_attached(handle).hovered = True

    def execute_script(self, script: str, arg: Any = None) -> Any:
        self.scripts.append(script)
        if script == "el => el.click()":
            arg.js_clicks += 1
            if arg.on_click is not None:
                arg.on_click()
            return None
        if "scrollIntoView" in script:
            arg.scrolled = True
            return None
        if "el.options" in script:
            return list(arg.options)
        if "readyState" in script:
            return self.ready
        return None

    def switch_to_frame(self, handle):
        if handle.frame is None:
            raise ElementNotFoundError(f"Frame is not available: {handle!r}")
        self.frame = handle.frame
        return handle.frame

    def switch_to_default_content(self) -> None:
        self.frame = None

    def navigate(self, url: str) -> None:
        self.url = url

    def refresh(self) -> None:
        self.refreshes += 1

    def get_current_url(self) -> str:
        return self.url

    def screenshot(self, full_page: bool = True) -> bytes:
        return b"\x89PNG"
