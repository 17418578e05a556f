"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework built on explicit waits.

Components:
    - wait_engine: Fixed-interval polling with named wait policies
    - conditions: Element, frame and document conditions for the wait engine
    - element_actions: Wait-backed find/click/type/read operations
    - browser_actions: Navigation and document readiness
    - page_base: Base page object
    - browser_manager: Driver session lifecycle
    - config_loader: YAML configuration profiles
    - soft_assertions: Collected assertions

Author: Automation Team
License: MIT
================================================================================
"""

from .exceptions import (
    ConfigurationError,
    ElementNotFoundError,
    HarnessError,
    InterceptedActionError,
    StaleElementError,
    WaitTimeoutError,
)
from .locators import ElementLocator, css, xpath
from .wait_engine import WaitCondition, WaitEngine, WaitPolicy, wait_until
from .driver_session import DriverSession
from .element_actions import ElementActions
from .browser_actions import BrowserActions
from .config_loader import BrowserType, ConfigLoader, HarnessConfig, load_harness_config
from .browser_manager import BrowserManager, driver_session
from .page_base import BasePage
from .soft_assertions import SoftAssertions

__all__ = [
    "HarnessError",
    "WaitTimeoutError",
    "ElementNotFoundError",
    "InterceptedActionError",
    "StaleElementError",
    "ConfigurationError",
    "ElementLocator",
    "css",
    "xpath",
    "WaitCondition",
    "WaitEngine",
    "WaitPolicy",
    "wait_until",
    "DriverSession",
    "ElementActions",
    "BrowserActions",
    "BrowserType",
    "ConfigLoader",
    "HarnessConfig",
    "load_harness_config",
    "BrowserManager",
    "driver_session",
    "BasePage",
    "SoftAssertions",
]
