"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for driver
session management, page objects, and test setup/teardown.

Key Features:
- One driver session per test, always disposed afterwards
- Page Object fixtures
- Soft assertion collector flushed at teardown
- Screenshot capture on failure

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger

from search_autotest.ui_testing.framework.browser_manager import BrowserManager
from search_autotest.ui_testing.framework.config_loader import HarnessConfig
from search_autotest.ui_testing.framework.driver_session import DriverSession
from search_autotest.ui_testing.framework.soft_assertions import SoftAssertions
from search_autotest.ui_testing.pages.google_home_page import GoogleHomePage


# ================================================================================
# Driver Session Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def driver_session(
    harness_config: HarnessConfig,
    request: pytest.FixtureRequest,
) -> Generator[DriverSession, None, None]:
    """
    Function-scoped driver session.

    Launches a fresh browser for each test and disposes it after the test,
    whether it passed, failed or raised.
    """
    logger.info(f"Test starting: {request.node.name}")
    with BrowserManager(harness_config) as manager:
        yield manager.session
    logger.info(f"Test finished: {request.node.name}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def google_home_page(
    driver_session: DriverSession,
    harness_config: HarnessConfig,
) -> GoogleHomePage:
    """
    Provides GoogleHomePage instance bound to the test's session.

    The page is not loaded yet; call `visit()` to navigate to it.
    """
    return GoogleHomePage(driver_session, harness_config)


@pytest.fixture
def softly() -> Generator[SoftAssertions, None, None]:
    """
    Soft assertion collector.

    Anything still recorded when the test ends is reported at teardown.
    """
    collector = SoftAssertions()
    yield collector
    collector.assert_all()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Takes a full-page screenshot while the session is still alive and
    attaches it to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("driver_session")
        if session is None or session.closed:
            return
        try:
            allure.attach(
                session.screenshot(full_page=True),
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
            allure.attach(
                session.get_current_url(),
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
        except Exception as e:
            # Log but don't fail if screenshot capture fails
            logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "anagram": {
            "term": "anagram",
            "expected": ["Did you mean:", "nag a ram"],
        },
    }
