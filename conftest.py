"""
Repository-level pytest configuration.

Initializes logging once for the whole test process. UI settings come from
testsuites/config/config.yaml, overridden by UI_* environment variables
(run_tests.py sets only the ones passed on its command line).
"""

from __future__ import annotations

from autotest_tools.common import init_logger


def pytest_configure(config):
    init_logger()
