"""
================================================================================
Browser Manager
================================================================================

Driver session lifecycle management for UI automation.

Features:
    - One Playwright instance, browser, context and page per session
    - Browser type lookup table (Chrome, Edge, Firefox, Safari)
    - Transparent browser binary install when the executable is missing
    - Guaranteed single disposal, including after a failed start
    - Serialized session start/close across threads

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import subprocess
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from .config_loader import BrowserType, HarnessConfig
from .driver_session import DriverSession


# Guards session start/close so concurrent tests cannot interleave them
_LIFECYCLE_LOCK = threading.Lock()


@dataclass(frozen=True)
class BrowserLaunchSpec:
    """
    How to launch one browser type with Playwright.

    Attributes:
        engine: Playwright browser type attribute - 'chromium', 'firefox', 'webkit'
        channel: Branded browser channel (e.g. 'msedge'), None for bundled builds
        install_target: Argument for `playwright install`
    """
    engine: str
    channel: Optional[str]
    install_target: str


BROWSER_LAUNCHERS: Dict[BrowserType, BrowserLaunchSpec] = {
    BrowserType.CHROME: BrowserLaunchSpec("chromium", None, "chromium"),
    BrowserType.EDGE: BrowserLaunchSpec("chromium", "msedge", "msedge"),
    BrowserType.FIREFOX: BrowserLaunchSpec("firefox", None, "firefox"),
    BrowserType.SAFARI: BrowserLaunchSpec("webkit", None, "webkit"),
}


def install_browser(target: str) -> None:
    """Download a browser build through the Playwright CLI."""
    logger.info(f"Installing Playwright browser: {target}")
    subprocess.run(
        [sys.executable, "-m", "playwright", "install", target],
        check=True,
    )


def _is_missing_executable(error: Exception) -> bool:
    message = str(error).lower()
    return "executable doesn't exist" in message or "playwright install" in message


class BrowserManager:
    """
    Owns the browser resources behind one driver session.

    Usage:
        with BrowserManager(config) as manager:
            session = manager.session
            session.navigate("https://www.google.com/")

        # Or through the convenience context manager
        with driver_session(config) as session:
            ...
    """

    # Extra launch arguments per Playwright engine
    DEFAULT_LAUNCH_ARGS: Dict[str, list] = {
        "chromium": [
            "--ignore-certificate-errors",
            "--disable-blink-features=AutomationControlled",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
        "locale": "en-US",
    }

    def __init__(
        self,
        config: HarnessConfig,
        playwright_factory: Callable[[], Any] = sync_playwright,
        installer: Callable[[str], None] = install_browser,
    ):
        """
        Initialize browser manager.

        Args:
            config: Harness configuration (browser type, headless, timeouts)
            playwright_factory: Returns an object whose start() yields Playwright
            installer: Installs a browser build by `playwright install` target
        """
        self.config = config
        self._playwright_factory = playwright_factory
        self._installer = installer

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._session: Optional[DriverSession] = None
        self._started = False
        self._disposed = False

    def __enter__(self) -> "BrowserManager":
        """Context manager entry - start browser."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close browser."""
        self.close()

    @property
    def session(self) -> DriverSession:
        if self._session is None:
            raise RuntimeError("Browser not started. Call start() first.")
        return self._session

    def start(self) -> DriverSession:
        """
        Start Playwright, launch the browser and open a page.

        If any step fails, everything created so far is disposed before the
        error propagates.

        Returns:
            The driver session for the new page
        """
        with _LIFECYCLE_LOCK:
            if self._started:
                raise RuntimeError("BrowserManager can only be started once.")
            self._started = True

            try:
                self._playwright = self._playwright_factory().start()
                self._browser = self._launch()
                self._context = self._browser.new_context(**self._context_options())
                page = self._context.new_page()
                page.set_default_timeout(self.config.timeouts.default * 1000)
            except Exception:
                logger.error(f"Failed to start browser: {self.config.browser.value}")
                self._dispose()
                raise

        self._session = DriverSession(
            page,
            on_quit=self.close,
            native_click_timeout=self.config.timeouts.native_click,
        )
        logger.debug(
            f"Browser started: {self.config.browser.value} "
            f"(headless={self.config.headless})"
        )
        return self._session

    def close(self) -> None:
        """Close context, browser and Playwright. Runs at most once."""
        with _LIFECYCLE_LOCK:
            self._dispose()

    @property
    def disposed(self) -> bool:
        return self._disposed

    # =========================================================================
    # Internals
    # =========================================================================

    def _launch(self) -> Browser:
        spec = BROWSER_LAUNCHERS[self.config.browser]
        launcher = getattr(self._playwright, spec.engine)

        options: Dict[str, Any] = {"headless": self.config.headless}
        if spec.channel:
            options["channel"] = spec.channel
        if spec.engine in self.DEFAULT_LAUNCH_ARGS:
            options["args"] = list(self.DEFAULT_LAUNCH_ARGS[spec.engine])

        try:
            return launcher.launch(**options)
        except PlaywrightError as e:
            if not (self.config.auto_install and _is_missing_executable(e)):
                raise
            logger.warning(
                f"{self.config.browser.value} executable not found, "
                f"installing '{spec.install_target}'"
            )
            self._installer(spec.install_target)
            return launcher.launch(**options)

    def _context_options(self) -> Dict[str, Any]:
        width, height = self.config.viewport
        return {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": {"width": width, "height": height},
        }

    def _dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True

        if self._context is not None:
            try:
                self._context.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser context: {e}")
            self._context = None

        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser: {e}")
            self._browser = None

        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")


@contextmanager
def driver_session(config: HarnessConfig, **kwargs: Any) -> Iterator[DriverSession]:
    """
    Scoped driver session: started on entry, disposed on exit.

    Args:
        config: Harness configuration
        **kwargs: Passed through to BrowserManager
    """
    with BrowserManager(config, **kwargs) as manager:
        yield manager.session


__all__ = [
    "BrowserManager",
    "BrowserLaunchSpec",
    "BROWSER_LAUNCHERS",
    "driver_session",
    "install_browser",
]
