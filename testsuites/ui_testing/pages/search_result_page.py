"""
================================================================================
Search Result Page Object
================================================================================

The search page: a query box and a list of result headings.

Both kinds of access are exposed for each element:
    - ``search_box`` / ``first_search_result``: pre-resolved elements
    - ``by_search_box`` / ``by_first_search_result``: Locators for fresh
      lookups and waits (preferred)

One page object can be reused by any number of test classes.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from testsuites.ui_testing.framework.conditions import visibility_of_element_located
from testsuites.ui_testing.framework.locator import By, Locator
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.wait_policy import Wait
from testsuites.ui_testing.framework.web_element import WebElement


class SearchResultPage(PageBase):
    """Search page object."""

    PAGE_TITLE = "Search"

    SEARCH_BOX = Locator(By.NAME, "q")
    FIRST_SEARCH_RESULT = Locator(By.CSS_SELECTOR, "h3.r a")

    ELEMENTS = (
        ("search_box", SEARCH_BOX),
        ("first_search_result", FIRST_SEARCH_RESULT),
    )

    # Pre-resolved elements

    @property
    def search_box(self) -> WebElement:
        return self.element("search_box")

    @property
    def first_search_result(self) -> WebElement:
        return self.element("first_search_result")

    # Locators (preferred)

    @property
    def by_search_box(self) -> Locator:
        return self.locator("search_box")

    @property
    def by_first_search_result(self) -> Locator:
        return self.locator("first_search_result")

    # Workflow helpers

    @allure.step("Search for {text}")
    def search(self, text: str, wait: Optional[Wait] = None) -> None:
        """Wait for the search box, type ``text`` and submit the form."""
        wait = wait or self.session.wait()
        box = wait.until(visibility_of_element_located(self.by_search_box))
        box.send_keys(text)
        box.submit()
        logger.info(f"Submitted search: {text!r}")

    @allure.step("Read first result")
    def first_result_text(self, wait: Optional[Wait] = None) -> str:
        """Wait for the first result to be visible and return its text."""
        wait = wait or self.session.wait()
        result = wait.until(visibility_of_element_located(self.by_first_search_result))
        return result.text
