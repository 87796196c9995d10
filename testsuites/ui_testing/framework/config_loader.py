"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration with environment variable overrides, and the typed
UI settings built from it.

Features:
    - Single YAML file, loaded once per process
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access with defaults
    - Typed ``UiSettings`` for the session, wait and screenshot layers

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Bundled target page used when no base URL is configured
DEMO_SITE_PAGE = Path(__file__).parent.parent / "site" / "search.html"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.browser", "chromium")
        'chromium'

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - ui.headless -> UI_HEADLESS
        - ui.wait.timeout -> UI_WAIT_TIMEOUT
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton: configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path or DEFAULT_CONFIG_PATH)
        self._load_config()
        self._initialized = True

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
            key: Dot-notation path (e.g., "ui.wait.timeout")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
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
        """Get an entire top-level section, or an empty dict."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
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

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next instance reloads from disk."""
        cls._instance = None
        cls._config = {}


# =============================================================================
# Typed UI settings
# =============================================================================

@dataclass
class UiSettings:
    """
    Settings consumed by the UI framework.

    Attributes:
        base_url: Target page the scenarios start from
        browser: 'chromium', 'firefox' or 'webkit'
        headless: Run without a visible window
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        action_timeout: Seconds a single action may auto-wait
        implicit_wait: Lookup grace period in seconds (0 = explicit waits only)
        wait_timeout: Default explicit wait budget in seconds
        poll_interval: Default explicit wait poll interval in seconds
        screenshot_on_failure_only: Capture the result screenshot only on failure
        screenshot_dir: Directory of the screenshot artifact
        screenshot_name: Fixed file name of the screenshot artifact
    """
    base_url: str = field(default_factory=lambda: DEMO_SITE_PAGE.as_uri())
    browser: str = "chromium"
    headless: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    action_timeout: float = 5.0
    implicit_wait: float = 0.0
    wait_timeout: float = 20.0
    poll_interval: float = 0.25
    screenshot_on_failure_only: bool = True
    screenshot_dir: str = "reports/screenshots"
    screenshot_name: str = "result.png"


def load_ui_settings(config: Optional[ConfigLoader] = None) -> UiSettings:
    """
    Build UiSettings from configuration.

    Args:
        config: Loader to read from, defaults to the process singleton

    Returns:
        UiSettings with YAML/env values applied over the defaults

    Raises:
        ConfigurationError: On values of the wrong kind
    """
    config = config or ConfigLoader()
    defaults = UiSettings()

    try:
        settings = UiSettings(
            base_url=config.get("ui.base_url", "") or defaults.base_url,
            browser=str(config.get("ui.browser", defaults.browser)),
            headless=bool(config.get("ui.headless", defaults.headless)),
            viewport_width=int(config.get("ui.viewport.width", defaults.viewport_width)),
            viewport_height=int(config.get("ui.viewport.height", defaults.viewport_height)),
            action_timeout=float(config.get("ui.action_timeout", defaults.action_timeout)),
            implicit_wait=float(config.get("ui.implicit_wait", defaults.implicit_wait)),
            wait_timeout=float(config.get("ui.wait.timeout", defaults.wait_timeout)),
            poll_interval=float(config.get("ui.wait.poll_interval", defaults.poll_interval)),
            screenshot_on_failure_only=bool(
                config.get(
                    "ui.screenshot.on_failure_only",
                    defaults.screenshot_on_failure_only,
                )
            ),
            screenshot_dir=str(config.get("ui.screenshot.dir", defaults.screenshot_dir)),
            screenshot_name=str(config.get("ui.screenshot.name", defaults.screenshot_name)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid UI setting: {e}") from e

    logger.debug(f"UI settings: browser={settings.browser}, base_url={settings.base_url}")
    return settings


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEMO_SITE_PAGE",
    "UiSettings",
    "load_ui_settings",
]
