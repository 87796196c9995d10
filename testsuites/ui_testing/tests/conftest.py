"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the UI scenarios.

Key Features:
- One ScenarioRun (and so one browser session) per test, never shared
- Session released after every test, whatever the outcome
- Screenshot per the configured policy (failure-only by default)
- Clean skip when the Playwright browser binary is not installed

================================================================================
"""

from typing import Callable, Generator

import pytest

from testsuites.ui_testing.framework.browser_session import BrowserSession, SessionConfig
from testsuites.ui_testing.framework.config_loader import UiSettings, load_ui_settings
from testsuites.ui_testing.framework.exceptions import SessionError
from testsuites.ui_testing.framework.scenario import ScenarioRun, ScreenshotPolicy
from testsuites.ui_testing.framework.wait_policy import Wait
from testsuites.ui_testing.pages.search_result_page import SearchResultPage


# Messages Playwright gives when the browser itself can't be provided
_BROWSER_MISSING_MARKERS = (
    "Executable doesn't exist",
    "playwright install",
    "Host system is missing dependencies",
)


# ================================================================================
# Settings Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_settings() -> UiSettings:
    """UI settings from testsuites/config/config.yaml and UI_* env vars."""
    return load_ui_settings()


@pytest.fixture(scope="session")
def screenshot_policy(ui_settings: UiSettings) -> ScreenshotPolicy:
    return ScreenshotPolicy.from_settings(ui_settings)


@pytest.fixture(scope="session")
def session_factory(ui_settings: UiSettings) -> Callable[[], BrowserSession]:
    """Builds a fresh, unopened session for each scenario."""
    config = SessionConfig(
        browser_type=ui_settings.browser,
        headless=ui_settings.headless,
        viewport={"width": ui_settings.viewport_width, "height": ui_settings.viewport_height},
        action_timeout=ui_settings.action_timeout,
        implicit_wait=ui_settings.implicit_wait,
    )
    return lambda: BrowserSession(config)


# ================================================================================
# Scenario Fixtures
# ================================================================================

@pytest.fixture
def scenario(
    request: pytest.FixtureRequest,
    ui_settings: UiSettings,
    session_factory: Callable[[], BrowserSession],
    screenshot_policy: ScreenshotPolicy,
) -> Generator[ScenarioRun, None, None]:
    """
    Function-scoped scenario run.

    Opens the session and navigates to the target page before the test;
    finishes the run (screenshot per policy, session release) after it.
    """
    run = ScenarioRun(
        name=request.node.name,
        session_factory=session_factory,
        screenshot_policy=screenshot_policy,
        target_url=ui_settings.base_url,
    )
    try:
        run.start()
    except SessionError as e:
        if any(marker in str(e) for marker in _BROWSER_MISSING_MARKERS):
            pytest.skip(f"Playwright browser unavailable: {e}")
        raise

    yield run

    run.finish(getattr(request.node, "scenario_error", None))


@pytest.fixture
def wait(scenario: ScenarioRun, ui_settings: UiSettings) -> Wait:
    """Explicit wait on the scenario's session with the configured budget."""
    return scenario.session.wait(
        timeout=ui_settings.wait_timeout,
        poll_interval=ui_settings.poll_interval,
    )


@pytest.fixture
def search_page(scenario: ScenarioRun, ui_settings: UiSettings) -> SearchResultPage:
    """Provides SearchResultPage bound to the scenario's session."""
    return SearchResultPage(scenario.session, base_url=ui_settings.base_url)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Record the exception that ended the test body.

    The scenario fixture hands it to ScenarioRun.finish() so the failure
    screenshot and diagnostics are produced before the session is closed.
    """
    outcome = yield
    outcome.get_result()

    if call.when == "call" and call.excinfo is not None:
        if not call.excinfo.errisinstance(pytest.skip.Exception):
            item.scenario_error = call.excinfo.value
