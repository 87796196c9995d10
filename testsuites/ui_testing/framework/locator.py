"""
================================================================================
Locator Descriptors
================================================================================

Declarative (strategy, value) pairs identifying page elements.

A Locator is pure data: it never touches the page. Translating it into a
Playwright selector string is a side-effect-free operation, and a malformed
selector value only fails when the session actually runs the query.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class By(str, Enum):
    """Element lookup strategies."""

    ID = "id"
    NAME = "name"
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"


def _quote(value: str) -> str:
    """Quote a value for use inside a CSS attribute or text pseudo-class."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Locator:
    """
    Immutable element locator.

    Attributes:
        strategy: Lookup strategy
        value: Selector value, interpreted according to ``strategy``

    Usage:
        >>> search_box = Locator(By.NAME, "q")
        >>> search_box.to_selector()
        'css=[name="q"]'
    """

    strategy: By
    value: str

    def __post_init__(self) -> None:
        strategy = self.strategy
        if not isinstance(strategy, By):
            try:
                strategy = By(strategy)
            except ValueError:
                raise ValueError(f"Unknown locator strategy: {self.strategy!r}") from None
            object.__setattr__(self, "strategy", strategy)

        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError(
                f"Locator value for {strategy.name} must be a non-empty string, "
                f"got {self.value!r}"
            )

    # =========================================================================
    # Convenience constructors
    # =========================================================================

    @classmethod
    def by_id(cls, value: str) -> "Locator":
        return cls(By.ID, value)

    @classmethod
    def by_name(cls, value: str) -> "Locator":
        return cls(By.NAME, value)

    @classmethod
    def by_css(cls, value: str) -> "Locator":
        return cls(By.CSS_SELECTOR, value)

    @classmethod
    def by_xpath(cls, value: str) -> "Locator":
        return cls(By.XPATH, value)

    # =========================================================================
    # Translation
    # =========================================================================

    def to_selector(self) -> str:
        """
        Translate into a Playwright selector string.

        Returns:
            Selector usable with ``page.query_selector``/``query_selector_all``
        """
        strategy, value = self.strategy, self.value

        if strategy is By.ID:
            return f"id={value}"
        if strategy is By.NAME:
            return f"css=[name={_quote(value)}]"
        if strategy is By.CSS_SELECTOR:
            return f"css={value}"
        if strategy is By.XPATH:
            return f"xpath={value}"
        if strategy is By.CLASS_NAME:
            return f"css=.{value}"
        if strategy is By.TAG_NAME:
            return f"css={value}"
        if strategy is By.LINK_TEXT:
            return f"css=a:text-is({_quote(value)})"
        if strategy is By.PARTIAL_LINK_TEXT:
            return f"css=a:has-text({_quote(value)})"

        raise ValueError(f"Unsupported locator strategy: {strategy!r}")

    def describe(self) -> str:
        """Human-readable form used in logs and reports."""
        return f"By.{self.strategy.name}: {self.value}"

    def __str__(self) -> str:
        return self.describe()


LocatorLike = Union[Locator, tuple]


def as_locator(target: LocatorLike) -> Locator:
    """
    Accept a Locator or a ``(strategy, value)`` tuple.

    Tuples are the shape most Selenium-era page objects use, so callers
    migrating from them can keep their constants.
    """
    if isinstance(target, Locator):
        return target
    if isinstance(target, tuple) and len(target) == 2:
        return Locator(*target)
    raise TypeError(f"Expected Locator or (strategy, value) tuple, got {target!r}")


__all__ = [
    "By",
    "Locator",
    "LocatorLike",
    "as_locator",
]
