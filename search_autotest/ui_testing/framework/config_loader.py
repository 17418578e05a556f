"""
================================================================================
Configuration Loader
================================================================================

YAML-based harness configuration with environment variable override support.

Features:
    - Named configuration profiles under the `config` section
    - Profile selection via the `conf` key (YAML, UI_CONF env var or --conf)
    - Environment variable override (UI_TIMEOUTS_DEFAULT overrides timeouts.default)
    - Immutable HarnessConfig built once and passed explicitly

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from loguru import logger

from .exceptions import ConfigurationError
from .wait_engine import WaitPolicy


# Default configuration file path (repository root /config/config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parents[3] / "config" / "config.yaml"

ENV_PREFIX = "UI_"

DEFAULT_PROFILE = "current"


class BrowserType(str, Enum):
    """Supported desktop browsers."""
    CHROME = "Chrome"
    EDGE = "Edge"
    FIREFOX = "Firefox"
    SAFARI = "Safari"

    @classmethod
    def parse(cls, name: str) -> "BrowserType":
        """
        Case-insensitive lookup by browser name.

        Raises:
            ConfigurationError: The name is not a supported browser
        """
        for member in cls:
            if member.value.lower() == str(name).strip().lower():
                return member
        supported = ", ".join(m.value for m in cls)
        raise ConfigurationError(
            f"Unsupported browser '{name}'. Supported browsers: {supported}"
        )


@dataclass(frozen=True)
class Timeouts:
    """
    Wait budgets in seconds.

    Attributes:
        default: Strict element waits
        probe: Non-throwing existence/visibility probes
        page_load: Document readiness waits
        poll_interval: Pause between polls
        native_click: Budget for a native click before it counts as intercepted
    """
    default: float = 20.0
    probe: float = 2.0
    page_load: float = 10.0
    poll_interval: float = 0.5
    native_click: float = 2.0

    def policies(self) -> Dict[str, WaitPolicy]:
        """Wait policies for WaitEngine built from these timeouts."""
        return {
            "default": WaitPolicy(timeout=self.default, poll_interval=self.poll_interval),
            "probe": WaitPolicy(timeout=self.probe, poll_interval=self.poll_interval),
            "page_load": WaitPolicy(timeout=self.page_load, poll_interval=self.poll_interval),
        }


@dataclass(frozen=True)
class HarnessConfig:
    """Resolved harness configuration, read-only after load."""
    browser: BrowserType
    base_url: str
    profile: str = DEFAULT_PROFILE
    headless: bool = True
    auto_install: bool = True
    viewport: Tuple[int, int] = (1920, 1080)
    timeouts: Timeouts = field(default_factory=Timeouts)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_ prefix, dots become underscores)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> loader = ConfigLoader()
        >>> loader.get("timeouts.default", 20.0)
        20.0
        >>> config = loader.load()
        >>> config.browser
        <BrowserType.CHROME: 'Chrome'>
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file. Falls back to the
                UI_CONFIG_FILE env var, then DEFAULT_CONFIG_PATH.
        """
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG_FILE")
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "timeouts.probe")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_value = os.environ.get(self._env_key(key))
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        value = self.get(section, {})
        return value if isinstance(value, dict) else {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    # =========================================================================
    # Harness configuration
    # =========================================================================

    def resolve_profile(self, override: Optional[str] = None) -> Tuple[str, Dict[str, Any]]:
        """
        Pick the active configuration profile.

        An explicit override (argument, UI_CONF or top-level `conf`) names a
        profile under `config`, or a full dotted path. Without one the
        `config.current` profile is used.

        Returns:
            Tuple of (profile name, profile settings)

        Raises:
            ConfigurationError: The named profile does not exist
        """
        name = override or self.get("conf")
        if name:
            logger.info(f"Setting config to '{name}'")
            path = name if "." in name else f"config.{name}"
        else:
            name, path = DEFAULT_PROFILE, f"config.{DEFAULT_PROFILE}"

        section = self._lookup(path)
        if not isinstance(section, dict):
            raise ConfigurationError(f"Unknown configuration profile: {name}")
        return name, section

    def load(self, profile: Optional[str] = None) -> HarnessConfig:
        """
        Build the immutable harness configuration.

        Args:
            profile: Profile name overriding `conf`/UI_CONF

        Returns:
            HarnessConfig for the selected profile
        """
        name, section = self.resolve_profile(profile)

        browser = self._env_or("browser", section.get("browser", BrowserType.CHROME.value))
        base_url = self._env_or("base_url", section.get("baseurl") or self.get("config.baseurl"))
        if not base_url:
            raise ConfigurationError(f"No baseurl configured for profile '{name}'")

        headless = self._convert_type(
            self._env_or("headless", section.get("headless", True)), True
        )
        auto_install = self._convert_type(
            self._env_or("auto_install", section.get("auto_install", True)), True
        )
        viewport = section.get("viewport") or {}

        defaults = Timeouts()
        timeouts = Timeouts(
            default=float(self.get("timeouts.default", defaults.default)),
            probe=float(self.get("timeouts.probe", defaults.probe)),
            page_load=float(self.get("timeouts.page_load", defaults.page_load)),
            poll_interval=float(self.get("timeouts.poll_interval", defaults.poll_interval)),
            native_click=float(self.get("timeouts.native_click", defaults.native_click)),
        )

        config = HarnessConfig(
            browser=BrowserType.parse(browser),
            base_url=str(base_url).rstrip("/"),
            profile=name,
            headless=headless,
            auto_install=auto_install,
            viewport=(
                int(viewport.get("width", 1920)),
                int(viewport.get("height", 1080)),
            ),
            timeouts=timeouts,
            log_level=str(self.get("logging.level", "INFO")),
            log_file=self.get("logging.file"),
            log_rotation=str(self.get("logging.rotation", "10 MB")),
            log_retention=str(self.get("logging.retention", "7 days")),
        )
        logger.debug(
            f"Harness config: profile={config.profile}, browser={config.browser.value}, "
            f"base_url={config.base_url}, headless={config.headless}"
        )
        return config

    # =========================================================================
    # Internals
    # =========================================================================

    def _lookup(self, path: str) -> Any:
        value: Any = self._config
        for part in path.split("."):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    def _env_key(self, key: str) -> str:
        return f"{ENV_PREFIX}{key.upper().replace('.', '_')}"

    def _env_or(self, key: str, fallback: Any) -> Any:
        env_value = os.environ.get(self._env_key(key))
        return fallback if env_value is None else env_value

    def _convert_type(self, value: Any, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None or not isinstance(value, str):
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value


def load_harness_config(
    config_path: Optional[Path] = None,
    profile: Optional[str] = None,
) -> HarnessConfig:
    """Load the harness configuration in one call."""
    return ConfigLoader(config_path).load(profile)


__all__ = [
    "BrowserType",
    "Timeouts",
    "HarnessConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_harness_config",
]
