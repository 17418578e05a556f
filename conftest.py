"""
Repository-level pytest configuration.

Why this exists:
  - Register the harness command line options (profile, browser, e2e switch)
  - Load the harness configuration once per run and hand it to fixtures
  - Initialize logging before any test starts
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from search_autotest.common import init_logger
from search_autotest.ui_testing.framework.config_loader import (
    BrowserType,
    HarnessConfig,
    load_harness_config,
)


def pytest_addoption(parser):
    group = parser.getgroup("search_autotest", "Search UI harness")
    group.addoption(
        "--conf",
        action="store",
        default=None,
        help="Configuration profile under `config` in config/config.yaml",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        choices=[b.value for b in BrowserType],
        help="Override the profile's browser",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests against a real browser and network",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def harness_config(request) -> HarnessConfig:
    """
    Harness configuration for the whole run, read-only once loaded.

    Command line options take precedence over the selected profile.
    """
    config = load_harness_config(profile=request.config.getoption("--conf"))

    overrides = {}
    browser = request.config.getoption("--ui-browser")
    if browser:
        overrides["browser"] = BrowserType.parse(browser)
    if request.config.getoption("--ui-headed"):
        overrides["headless"] = False
    if overrides:
        config = dataclasses.replace(config, **overrides)

    init_logger(
        level=config.log_level,
        log_file=config.log_file,
        rotation=config.log_rotation,
        retention=config.log_retention,
    )
    return config
