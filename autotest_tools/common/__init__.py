"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared configuration access and logging setup for the automation tools.

Exports:
    - get_config: Dot-path access to tool configuration
    - init_logger: Initialize loguru with the standard settings
    - reload_config: Re-read configuration files and re-init logging

Usage:
    from autotest_tools.common import get_config, init_logger

    init_logger()
    level = get_config("logging.level", "INFO")

================================================================================
"""

from .global_config import get_config, init_logger, reload_config

__all__ = [
    "get_config",
    "init_logger",
    "reload_config",
]
