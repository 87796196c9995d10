"""
================================================================================
Global Configuration for Automation Tools
================================================================================

Tool-level configuration and the shared Loguru logging setup.

Features:
    - YAML configuration shared with the test suites (testsuites/config)
    - Environment-specific overlay ({ENV}.yaml)
    - Environment variable overrides (LOGGING__LEVEL=DEBUG)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml
from loguru import logger

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

_REPO_ROOT = Path(__file__).parent.parent.parent


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Called once by the repo conftest and by run_tests.py; later calls are
    no-ops until ``reload_config()``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = str(level or get_config("logging.level", "INFO")).upper()
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _config_dirs() -> List[Path]:
    """Candidate configuration directories, first existing one wins."""
    return [
        Path("config"),
        _REPO_ROOT / "config",
        _REPO_ROOT / "testsuites" / "config",
    ]


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Loading order:
        1. Defaults
        2. config.yaml from the first existing config directory
        3. {ENV}.yaml from the same directory
        4. SECTION__KEY environment variables
    """
    global _config

    _config = _get_defaults()

    config_dir = next((d for d in _config_dirs() if d.is_dir()), None)
    if config_dir is None:
        logger.warning("No configuration directory found. Using defaults.")
    else:
        for name in ("config.yaml", f"{os.getenv('ENVIRONMENT', os.getenv('ENV', 'dev'))}.yaml"):
            path = config_dir / name
            if path.exists():
                with open(path, "r", encoding="utf-8") as f:
                    _config = _deep_merge(_config, yaml.safe_load(f) or {})
                logger.debug(f"Loaded configuration from {path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Double underscore separates nested keys:
        LOGGING__LEVEL=DEBUG overrides logging.level
    """
    for key, value in os.environ.items():
        if "__" in key and not key.startswith("__"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        current = d.get(key)
        if not isinstance(current, dict):
            current = d[key] = {}
        d = current
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.
    """
    _ensure_config_loaded()

    value: Any = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def reload_config() -> None:
    """Reloads the configuration from files and re-initializes logging."""
    global _config, _logger_initialized
    _config = {}
    _logger_initialized = False
    _load_config()
    init_logger()
    logger.info("Configuration reloaded.")
