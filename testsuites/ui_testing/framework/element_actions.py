# ================================================================================
# Element Actions Module
# ================================================================================
#
# Fluent, composable pointer/keyboard sequences.
#
# Steps are recorded by the builder methods and only run on perform(), in
# the order they were added. Each builder returns the chain, so a sequence
# reads top to bottom:
#
#   session.actions() \
#       .move_to_element(page.search_box) \
#       .send_keys("Seattle Code Camp") \
#       .send_keys(Keys.ENTER) \
#       .perform()
#
# ================================================================================

from __future__ import annotations

import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Union

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .exceptions import translate_error

if TYPE_CHECKING:
    from .browser_session import BrowserSession
    from .web_element import WebElement


class Keys(str, Enum):
    """Special keys, named the way Playwright's keyboard expects them."""

    ENTER = "Enter"
    RETURN = "Enter"
    TAB = "Tab"
    ESCAPE = "Escape"
    SPACE = " "
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    SHIFT = "Shift"
    CONTROL = "Control"
    ALT = "Alt"
    META = "Meta"


KeyInput = Union[str, Keys]


def describe_keys(values: Tuple[KeyInput, ...]) -> str:
    """Render typed values for logs without leaking long strings."""
    parts = []
    for value in values:
        if isinstance(value, Keys):
            parts.append(f"<{value.name}>")
        else:
            text = str(value)
            parts.append(repr(text if len(text) <= 50 else text[:50] + "..."))
    return " ".join(parts)


class ActionChain:
    """
    Deferred sequence of pointer and keyboard actions.

    Example:
        chain = ActionChain(session)
        chain.move_to_element(box).send_keys("query", Keys.ENTER).perform()
    """

    def __init__(self, session: "BrowserSession"):
        self._session = session
        self._steps: List[Tuple[str, Callable[[], None]]] = []

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> List[str]:
        """Descriptions of the pending steps."""
        return [description for description, _ in self._steps]

    def _add(self, description: str, step: Callable[[], None]) -> "ActionChain":
        self._steps.append((description, step))
        return self

    # =========================================================================
    # Pointer
    # =========================================================================

    def move_to_element(self, element: "WebElement") -> "ActionChain":
        """Move the pointer over the middle of ``element``."""
        return self._add(f"move to {element}", element.hover)

    def click(self, element: Optional["WebElement"] = None) -> "ActionChain":
        """Click ``element``, or at the current pointer position."""
        if element is not None:
            return self._add(f"click {element}", element.click)

        def click_here() -> None:
            mouse = self._session.page.mouse
            mouse.down()
            mouse.up()

        return self._add("click at pointer", click_here)

    # =========================================================================
    # Keyboard
    # =========================================================================

    def send_keys(self, *values: KeyInput) -> "ActionChain":
        """Type into whatever element currently has focus."""

        def type_values() -> None:
            keyboard = self._session.page.keyboard
            for value in values:
                if isinstance(value, Keys):
                    keyboard.press(value.value)
                else:
                    keyboard.type(str(value))

        return self._add(f"send keys {describe_keys(values)}", type_values)

    def send_keys_to_element(self, element: "WebElement", *values: KeyInput) -> "ActionChain":
        """Focus ``element`` first, then type."""
        self._add(f"focus {element}", element.focus)
        return self.send_keys(*values)

    def key_down(self, key: Keys) -> "ActionChain":
        return self._add(
            f"key down <{key.name}>",
            lambda: self._session.page.keyboard.down(key.value),
        )

    def key_up(self, key: Keys) -> "ActionChain":
        return self._add(
            f"key up <{key.name}>",
            lambda: self._session.page.keyboard.up(key.value),
        )

    def pause(self, seconds: float) -> "ActionChain":
        return self._add(f"pause {seconds}s", lambda: time.sleep(seconds))

    # =========================================================================
    # Execution
    # =========================================================================

    def perform(self) -> None:
        """
        Run the recorded steps in order and clear the chain.

        The chain is cleared even when a step fails, so a chain object can
        be reused after the caller handles the error.
        """
        steps, self._steps = self._steps, []
        with allure.step(f"Perform {len(steps)} chained action(s)"):
            for description, step in steps:
                logger.debug(f"Action: {description}")
                try:
                    step()
                except PlaywrightError as e:
                    raise translate_error(e) from e
        logger.info(f"Performed action chain: {', '.join(d for d, _ in steps)}")

    def reset(self) -> None:
        """Drop the pending steps without running them."""
        self._steps.clear()


__all__ = [
    "ActionChain",
    "Keys",
    "KeyInput",
    "describe_keys",
]
