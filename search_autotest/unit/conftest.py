"""
Fixtures shared by the framework unit tests.

Nothing here starts a browser: waits run against FakeSession and FakeClock.
"""

import os

import pytest

from search_autotest.ui_testing.framework.config_loader import (
    BrowserType,
    HarnessConfig,
    Timeouts,
)
from search_autotest.ui_testing.framework.wait_engine import WaitEngine
from search_autotest.unit.fakes import FakeClock, FakeSession


@pytest.fixture(autouse=True)
def _clean_ui_env(monkeypatch):
    """Keep UI_* variables from the shell out of the unit tests."""
    for key in list(os.environ):
        if key.startswith("UI_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(clock) -> FakeSession:
    return FakeSession(clock)


@pytest.fixture
def engine(session, clock) -> WaitEngine:
    return WaitEngine(session, clock=clock.time, sleep=clock.sleep)


@pytest.fixture
def fast_config() -> HarnessConfig:
    """Real-clock config with waits short enough for unit tests."""
    return HarnessConfig(
        browser=BrowserType.CHROME,
        base_url="https://www.google.com",
        timeouts=Timeouts(
            default=0.3,
            probe=0.1,
            page_load=0.3,
            poll_interval=0.02,
            native_click=0.1,
        ),
    )
