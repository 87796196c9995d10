"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based (sync API) UI automation framework.

Components:
    - locator: Declarative (strategy, value) element locators
    - browser_session: Browser session lifecycle and element lookups
    - web_element: Resolved element wrapper
    - element_actions: Fluent pointer/keyboard action chains
    - wait_policy / conditions: Explicit predicate-based waits
    - page_base: Base page object with explicit binding
    - scenario: Per-test lifecycle and screenshot policy
    - config_loader: YAML + environment settings

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_session import BrowserSession, SessionConfig
from .config_loader import ConfigLoader, ConfigurationError, UiSettings, load_ui_settings
from .element_actions import ActionChain, Keys
from .exceptions import (
    ActionTimeoutError,
    AutomationError,
    ElementNotFoundError,
    InvalidSelectorError,
    SessionError,
    StaleElementError,
    WaitDisciplineError,
)
from .locator import By, Locator
from .page_base import BasePage, PageBase
from .scenario import FailureKind, ScenarioRun, ScenarioState, ScenarioStateError, ScreenshotPolicy
from .wait_policy import Wait, WaitConfig, WaitTimeoutError
from .web_element import WebElement

__all__ = [
    "ActionChain",
    "ActionTimeoutError",
    "AutomationError",
    "BasePage",
    "BrowserSession",
    "By",
    "ConfigLoader",
    "ConfigurationError",
    "ElementNotFoundError",
    "FailureKind",
    "InvalidSelectorError",
    "Keys",
    "Locator",
    "PageBase",
    "ScenarioRun",
    "ScenarioState",
    "ScenarioStateError",
    "ScreenshotPolicy",
    "SessionConfig",
    "SessionError",
    "StaleElementError",
    "UiSettings",
    "Wait",
    "WaitConfig",
    "WaitDisciplineError",
    "WaitTimeoutError",
    "WebElement",
    "load_ui_settings",
]
