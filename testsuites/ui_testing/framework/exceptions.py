"""
================================================================================
UI Automation Exceptions
================================================================================

Error taxonomy shared by the session, element, wait and scenario layers,
plus the translation of Playwright errors into it.

    AutomationError
    ├── ElementNotFoundError   element absent at query time
    ├── StaleElementError      element handle detached from the DOM
    ├── InvalidSelectorError   selector rejected by the query engine
    ├── SessionError           browser session unusable or not open
    ├── ActionTimeoutError     a single action or navigation outran action_timeout
    └── WaitDisciplineError    explicit and implicit waits mixed on a session

Timeouts of explicit waits are raised as ``WaitTimeoutError`` from
``wait_policy`` (a ``TimeoutError`` subclass).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .locator import Locator


class AutomationError(Exception):
    """Base class for UI automation failures."""
    pass


class ElementNotFoundError(AutomationError):
    """Raised when a single-element lookup matches nothing."""

    def __init__(self, locator: Optional[Locator] = None, message: str = ""):
        self.locator = locator
        if not message:
            target = locator.describe() if locator else "element"
            message = f"No element found for {target}"
        super().__init__(message)


class StaleElementError(AutomationError):
    """Raised when an element handle no longer belongs to the live DOM."""
    pass


class InvalidSelectorError(AutomationError):
    """Raised when the query engine rejects a locator's selector."""
    pass


class SessionError(AutomationError):
    """Raised when the browser session cannot be opened or is no longer usable."""
    pass


class ActionTimeoutError(AutomationError, TimeoutError):
    """Raised when Playwright's auto-wait for one action or navigation times out."""
    pass


class WaitDisciplineError(AutomationError):
    """Raised when an explicit wait is requested on an implicit-wait session."""
    pass


_STALE_MARKERS = (
    "not attached",
    "detached",
    "context was destroyed",
    "is disposed",
)

_SELECTOR_MARKERS = (
    "unexpected token",
    "not a valid selector",
    "malformed",
    "syntaxerror",
    "unknown engine",
    "invalid selector",
)

_SESSION_MARKERS = (
    "has been closed",
    "target closed",
    "browser has disconnected",
    "connection closed",
)


def translate_error(
    error: PlaywrightError,
    locator: Optional[Locator] = None,
) -> AutomationError:
    """
    Map a Playwright error onto the automation taxonomy.

    Args:
        error: Error raised by Playwright
        locator: Locator involved in the failing call, if any

    Returns:
        The matching AutomationError (not raised)
    """
    message = str(error)
    lowered = message.lower()
    where = f" ({locator.describe()})" if locator else ""

    if isinstance(error, PlaywrightTimeoutError):
        return ActionTimeoutError(f"Action timed out{where}: {message}")
    if any(marker in lowered for marker in _SELECTOR_MARKERS):
        return InvalidSelectorError(f"Invalid selector{where}: {message}")
    if any(marker in lowered for marker in _STALE_MARKERS):
        return StaleElementError(f"Stale element{where}: {message}")
    if any(marker in lowered for marker in _SESSION_MARKERS):
        return SessionError(f"Browser session unusable{where}: {message}")
    return AutomationError(f"Automation call failed{where}: {message}")


__all__ = [
    "AutomationError",
    "ElementNotFoundError",
    "StaleElementError",
    "InvalidSelectorError",
    "ActionTimeoutError",
    "SessionError",
    "WaitDisciplineError",
    "translate_error",
]
