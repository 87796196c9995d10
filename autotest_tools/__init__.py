"""
================================================================================
Autotest Tools
================================================================================

Support utilities for the UI test suites.

Modules:
    - common: Shared configuration and logging utilities
    - report_tools: Allure attachment helpers

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import attach_screenshot

    init_logger()
    attach_screenshot("reports/screenshots/result.png")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
