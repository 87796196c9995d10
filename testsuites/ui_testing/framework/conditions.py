"""
================================================================================
Wait Conditions
================================================================================

Ready-made predicates for ``Wait.until`` / ``Wait.until_not``.

Each factory returns a callable taking the browser session. Lookups inside
a condition may raise ``ElementNotFoundError``; the wait treats that as
"not yet" and polls again.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, List, Union

from .locator import Locator, LocatorLike, as_locator
from .web_element import WebElement


def _named(description: str, predicate: Callable[[Any], Any]) -> Callable[[Any], Any]:
    predicate.description = description
    return predicate


def presence_of_element_located(locator: LocatorLike) -> Callable[[Any], WebElement]:
    """The element is attached to the DOM (not necessarily visible)."""
    target = as_locator(locator)

    def predicate(session) -> WebElement:
        return session.find_element(target)

    return _named(f"presence of {target}", predicate)


def visibility_of_element_located(
    locator: LocatorLike,
) -> Callable[[Any], Union[WebElement, bool]]:
    """The element is attached and visible; returns the element."""
    target = as_locator(locator)

    def predicate(session) -> Union[WebElement, bool]:
        element = session.find_element(target)
        return element if element.is_displayed() else False

    return _named(f"visibility of {target}", predicate)


def presence_of_all_elements_located(
    locator: LocatorLike,
) -> Callable[[Any], List[WebElement]]:
    """At least one element matches; returns all matches."""
    target = as_locator(locator)

    def predicate(session) -> List[WebElement]:
        return session.find_elements(target)

    return _named(f"presence of all {target}", predicate)


def invisibility_of_element_located(locator: LocatorLike) -> Callable[[Any], bool]:
    """No matching element is visible (absent counts as invisible)."""
    target = as_locator(locator)

    def predicate(session) -> bool:
        return not any(element.is_displayed() for element in session.find_elements(target))

    return _named(f"invisibility of {target}", predicate)


def text_to_be_present_in_element(locator: LocatorLike, text: str) -> Callable[[Any], bool]:
    """The element's rendered text contains ``text``."""
    target: Locator = as_locator(locator)

    def predicate(session) -> bool:
        return text in session.find_element(target).text

    return _named(f"text {text!r} in {target}", predicate)


def title_contains(fragment: str) -> Callable[[Any], bool]:
    def predicate(session) -> bool:
        return fragment in session.title

    return _named(f"title contains {fragment!r}", predicate)


def url_contains(fragment: str) -> Callable[[Any], bool]:
    def predicate(session) -> bool:
        return fragment in session.current_url

    return _named(f"url contains {fragment!r}", predicate)


__all__ = [
    "invisibility_of_element_located",
    "presence_of_all_elements_located",
    "presence_of_element_located",
    "text_to_be_present_in_element",
    "title_contains",
    "url_contains",
    "visibility_of_element_located",
]
