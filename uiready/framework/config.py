"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support,
and the explicit session configuration built from it.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (DRIVER_BROWSER overrides driver.browser)
    - Dot notation path access
    - Property lookup with empty-string default
    - SessionConfig: the options a browser session is started with

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .exceptions import ConfigurationError


# Default configuration file paths
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Recognised session properties
PROPERTY_BROWSER = "driver.browser"
PROPERTY_HOST = "driver.host"
PROPERTY_PORT = "driver.port"
PROPERTY_BINARY_PATH = "driver.binary_path"
PROPERTY_HEADLESS = "driver.headless"
PROPERTY_PROXY = "proxy.server"


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (DRIVER_BROWSER)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("driver.browser", "chrome")
        'firefox'  # From YAML or env var

        >>> config.get_property("proxy.server")
        ''  # Unset properties are empty strings
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.
        """
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

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
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
            key: Dot-notation path (e.g., "driver.browser")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_property(self, name: str) -> str:
        """
        Look up a property as a string, empty if unset.

        Args:
            name: Dot-notation property name (e.g., "proxy.server")
        """
        value = self.get(name)
        return "" if value is None else str(value)

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
        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


# =============================================================================
# Session Configuration
# =============================================================================

class Browser(Enum):
    """Browsers a session can be started with."""

    CHROME = "chrome"
    REMOTE_CHROME = "remotechrome"
    FIREFOX = "firefox"

    @classmethod
    def identify(cls, name: str) -> "Browser":
        """
        Find a Browser by its (case-insensitive) name.

        Raises:
            ValueError: If no browser has that name
        """
        for browser in cls:
            if browser.value == (name or "").strip().lower():
                return browser
        raise ValueError(f"Could not identify a browser by the name of '{name}'")


@dataclass(frozen=True)
class SessionConfig:
    """
    Options a browser session is started with.

    Attributes:
        browser: Which browser to drive
        proxy_server: Optional proxy as "host:port"
        driver_binary_path: Optional path to the browser executable
        remote_host: Host of a remote browser (REMOTE_CHROME only)
        remote_port: Port of a remote browser (REMOTE_CHROME only)
        headless: Run without a visible window
        implicit_wait_ms: Default timeout for driver-level actions
    """

    browser: Browser = Browser.CHROME
    proxy_server: Optional[str] = None
    driver_binary_path: Optional[str] = None
    remote_host: Optional[str] = None
    remote_port: Optional[str] = None
    headless: bool = True
    implicit_wait_ms: int = 500

    def __post_init__(self) -> None:
        if self.browser is Browser.REMOTE_CHROME and not (self.remote_host and self.remote_port):
            raise ConfigurationError(
                f"'{PROPERTY_HOST}' and '{PROPERTY_PORT}' must be defined for a remote browser"
            )

    @classmethod
    def from_loader(cls, loader: Optional[ConfigLoader] = None) -> "SessionConfig":
        """
        Build a SessionConfig from configuration properties.

        Raises:
            ConfigurationError: If the browser property is missing or unknown
        """
        loader = loader or ConfigLoader()
        browser_name = loader.get_property(PROPERTY_BROWSER)
        if not browser_name:
            raise ConfigurationError(f"The property '{PROPERTY_BROWSER}' is not defined")

        try:
            browser = Browser.identify(browser_name)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        config = cls(
            browser=browser,
            proxy_server=loader.get_property(PROPERTY_PROXY) or None,
            driver_binary_path=loader.get_property(PROPERTY_BINARY_PATH) or None,
            remote_host=loader.get_property(PROPERTY_HOST) or None,
            remote_port=loader.get_property(PROPERTY_PORT) or None,
            headless=loader.get(PROPERTY_HEADLESS, True),
        )
        logger.debug(f"Session configuration: {config}")
        return config


__all__ = [
    "ConfigLoader",
    "Browser",
    "SessionConfig",
]
