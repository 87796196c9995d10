"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

A page object binds a browser session to a fixed, enumerated set of named
Locators so tests never embed raw selector strings.

Binding is explicit:
    - construction only records the (name, Locator) pairs, it never touches
      the page
    - ``resolve()`` (alias ``bind()``) is the initialization pass that looks
      up every element currently present and leaves absent ones unresolved
    - ``element(name)`` returns the pre-resolved handle, retrying the lookup
      once if the element was absent during ``resolve()``
    - ``locator(name)`` / ``find(name)`` give fresh lookups through the same
      Locator, which is the preferred way since cached handles go stale

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import allure
from loguru import logger

from .browser_session import BrowserSession
from .conditions import title_contains
from .exceptions import AutomationError, ElementNotFoundError
from .locator import Locator, LocatorLike, as_locator
from .web_element import WebElement


ElementSpec = Tuple[str, LocatorLike]


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class SearchPage(BasePage):
            ELEMENTS = (
                ("search_box", Locator(By.NAME, "q")),
            )

        page = SearchPage(session).open().resolve()
        page.element("search_box").send_keys("query")
        session.find_element(page.locator("search_box"))

    Attributes:
        ELEMENTS: Declared (name, Locator) pairs, overridden in subclasses
        URL_PATH: Path appended to ``base_url`` by ``open()``
        PAGE_TITLE: Text the document title must contain once the page is open
    """

    # Override in subclasses
    ELEMENTS: Sequence[ElementSpec] = ()
    URL_PATH: str = ""
    PAGE_TITLE: str = ""

    def __init__(
        self,
        session: BrowserSession,
        elements: Optional[Iterable[ElementSpec]] = None,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            session: Browser session, borrowed for the page object's lifetime
            elements: (name, Locator) pairs; defaults to the class ``ELEMENTS``
            base_url: Application base URL used by ``open()``
        """
        self.session = session
        self.base_url = base_url.rstrip("/") if base_url else ""

        locators: Dict[str, Locator] = {}
        for name, locator in (self.ELEMENTS if elements is None else elements):
            if name in locators:
                raise ValueError(f"Duplicate element name in {type(self).__name__}: {name}")
            locators[name] = as_locator(locator)

        self._locators: Mapping[str, Locator] = MappingProxyType(locators)
        self._resolved: Dict[str, Optional[WebElement]] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} elements={list(self._locators)}>"

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def url(self) -> str:
        """Full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def is_loaded(self) -> bool:
        """True when the current document title matches ``PAGE_TITLE``."""
        return not self.PAGE_TITLE or title_contains(self.PAGE_TITLE)(self.session)

    def open(self) -> "BasePage":
        """
        Navigate to this page.

        Raises:
            ValueError: If the page has no URL
            AutomationError: If the loaded document is not this page
        """
        if not self.url:
            raise ValueError(f"{type(self).__name__} has no URL to open")
        with allure.step(f"Open {type(self).__name__}"):
            self.session.navigate(self.url)
            if not self.is_loaded():
                raise AutomationError(
                    f"{type(self).__name__} expected a title containing "
                    f"{self.PAGE_TITLE!r}, got {self.session.title!r}"
                )
        return self

    # =========================================================================
    # Binding
    # =========================================================================

    @property
    def names(self) -> List[str]:
        return list(self._locators)

    @property
    def locators(self) -> Mapping[str, Locator]:
        """Read-only view of name -> Locator."""
        return self._locators

    def locator(self, name: str) -> Locator:
        """Locator bound to ``name``."""
        try:
            return self._locators[name]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no element named {name!r}"
            ) from None

    def resolve(self) -> "BasePage":
        """
        Resolve every declared element currently present on the page.

        Absent elements stay unresolved; ``element()`` tries them again.

        Returns:
            self, for chaining
        """
        for name, locator in self._locators.items():
            self._resolved[name] = self.session.query_element(locator)

        missing = [name for name, element in self._resolved.items() if element is None]
        if missing:
            logger.debug(f"{type(self).__name__}: unresolved after bind: {missing}")
        return self

    bind = resolve

    def is_resolved(self, name: str) -> bool:
        self.locator(name)
        return self._resolved.get(name) is not None

    def element(self, name: str) -> WebElement:
        """
        Pre-resolved element for ``name``.

        The handle may be stale if the DOM changed after resolution; use
        ``find()`` for a fresh lookup.

        Raises:
            ElementNotFoundError: If the element is still absent
        """
        cached = self._resolved.get(name)
        if cached is not None:
            return cached

        element = self.session.query_element(self.locator(name))
        if element is None:
            raise ElementNotFoundError(
                self.locator(name),
                f"{type(self).__name__}.{name} not found ({self.locator(name).describe()})",
            )
        self._resolved[name] = element
        return element

    # =========================================================================
    # Fresh lookups
    # =========================================================================

    def find(self, name: str) -> WebElement:
        """Fresh single-element lookup; raises ElementNotFoundError if absent."""
        return self.session.find_element(self.locator(name))

    def query(self, name: str) -> Optional[WebElement]:
        """Fresh lookup returning None when absent."""
        return self.session.query_element(self.locator(name))

    def find_all(self, name: str) -> List[WebElement]:
        """Fresh collection lookup; empty list when absent."""
        return self.session.find_elements(self.locator(name))


__all__ = [
    "BasePage",
    "ElementSpec",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
