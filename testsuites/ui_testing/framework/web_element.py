"""
================================================================================
Web Element
================================================================================

Thin wrapper around a resolved Playwright ``ElementHandle``.

A WebElement is a snapshot: it points at one DOM node found at lookup time.
If the page re-renders that node, calls on the wrapper raise
``StaleElementError``; look the element up again through its Locator.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from playwright.sync_api import ElementHandle
from playwright.sync_api import Error as PlaywrightError

from .element_actions import KeyInput, Keys
from .exceptions import translate_error
from .locator import Locator


# Submits the owning form through requestSubmit() so that submit handlers
# run, the same way pressing Enter in the field would.
_SUBMIT_SCRIPT = """
el => {
    const form = el.form || el.closest('form');
    if (!form) {
        throw new Error('Element is not inside a form and cannot be submitted');
    }
    if (typeof form.requestSubmit === 'function') {
        form.requestSubmit();
    } else {
        form.submit();
    }
}
"""


class WebElement:
    """
    A single element resolved from the live page.

    Attributes:
        locator: Locator the element was found with (None when unknown)
    """

    def __init__(self, handle: ElementHandle, locator: Optional[Locator] = None):
        self._handle = handle
        self.locator = locator

    def __repr__(self) -> str:
        return f"<WebElement {self.locator.describe() if self.locator else 'anonymous'}>"

    __str__ = __repr__

    @property
    def handle(self) -> ElementHandle:
        """Underlying Playwright handle."""
        return self._handle

    def _call(self, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return method(*args, **kwargs)
        except PlaywrightError as e:
            raise translate_error(e, self.locator) from e

    # =========================================================================
    # State
    # =========================================================================

    @property
    def text(self) -> str:
        """Rendered text of the element, trimmed."""
        return (self._call(self._handle.inner_text) or "").strip()

    @property
    def tag_name(self) -> str:
        return self._call(self._handle.evaluate, "el => el.tagName.toLowerCase()")

    def get_attribute(self, name: str) -> Optional[str]:
        return self._call(self._handle.get_attribute, name)

    def is_displayed(self) -> bool:
        return bool(self._call(self._handle.is_visible))

    def is_enabled(self) -> bool:
        return bool(self._call(self._handle.is_enabled))

    # =========================================================================
    # Interaction
    # =========================================================================

    def click(self) -> None:
        self._call(self._handle.click)

    def hover(self) -> None:
        self._call(self._handle.hover)

    def focus(self) -> None:
        self._call(self._handle.focus)

    def clear(self) -> None:
        self._call(self._handle.fill, "")

    def send_keys(self, *values: KeyInput) -> None:
        """
        Type text and special keys into the element.

        Args:
            *values: Plain strings are typed character by character,
                ``Keys`` members are pressed
        """
        for value in values:
            if isinstance(value, Keys):
                self._call(self._handle.press, value.value)
            else:
                self._call(self._handle.type, str(value))

    def submit(self) -> None:
        """Submit the form this element belongs to."""
        self._call(self._handle.evaluate, _SUBMIT_SCRIPT)


__all__ = [
    "WebElement",
]
