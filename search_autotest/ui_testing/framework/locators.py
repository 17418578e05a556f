"""
================================================================================
Element Locators
================================================================================

Declarative element queries for page objects.

A locator is re-evaluated every time it is used, so it survives reloads and
DOM mutations. Page objects declare their locators in `_bind_locators()` and
pass them to `ElementActions`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from playwright.sync_api import ElementHandle


@dataclass(frozen=True)
class ElementLocator:
    """
    Stable element query.

    Attributes:
        selector: Playwright selector (CSS by default, `xpath=`/`text=` allowed)
        name: Human-readable element name for logs and Allure steps
    """
    selector: str
    name: str = ""

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} ({self.selector})"
        return self.selector


def css(selector: str, name: str = "") -> ElementLocator:
    """Shorthand for a CSS locator."""
    return ElementLocator(selector, name)


def xpath(expression: str, name: str = "") -> ElementLocator:
    """Shorthand for an XPath locator."""
    return ElementLocator(f"xpath={expression}", name)


# Anything element actions accept as a target
Target = Union[ElementLocator, ElementHandle, str]


def as_locator(target: Union[ElementLocator, str]) -> ElementLocator:
    """Wrap raw selector strings into an ElementLocator."""
    if isinstance(target, ElementLocator):
        return target
    return ElementLocator(target)


def is_locator(target: object) -> bool:
    """True for locators and raw selector strings, False for resolved handles."""
    return isinstance(target, (ElementLocator, str))


def describe(target: object) -> str:
    """Readable description of a locator or handle."""
    if is_locator(target):
        return str(target)
    return f"<element handle {target!r}>"


__all__ = [
    "ElementLocator",
    "Target",
    "css",
    "xpath",
    "as_locator",
    "is_locator",
    "describe",
]
