"""
================================================================================
Browser Session
================================================================================

Lifecycle of one browser session and the lookup operations tests use.

Features:
    - One isolated browser + context + page per session, never shared
    - Single-element, optional and collection lookups by Locator
    - Screenshot capture
    - One wait discipline per session (explicit by default)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from .element_actions import ActionChain
from .exceptions import ElementNotFoundError, SessionError, translate_error
from .locator import LocatorLike, as_locator
from .wait_policy import Wait
from .web_element import WebElement


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

# Poll interval used by the implicit lookup grace period
IMPLICIT_POLL_INTERVAL = 0.25


@dataclass
class SessionConfig:
    """
    Browser session settings.

    Attributes:
        browser_type: 'chromium', 'firefox' or 'webkit'
        headless: Run without a visible window
        viewport: Page viewport size
        action_timeout: Seconds a single click/type may auto-wait for
        implicit_wait: Lookup grace period in seconds; 0 disables it and
            selects the explicit wait discipline
        launch_args: Extra browser command line switches
    """
    browser_type: str = "chromium"
    headless: bool = True
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    action_timeout: float = 5.0
    implicit_wait: float = 0.0
    launch_args: List[str] = field(default_factory=lambda: ["--ignore-certificate-errors"])

    def __post_init__(self) -> None:
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser {self.browser_type!r}, "
                f"expected one of {SUPPORTED_BROWSERS}"
            )
        if self.implicit_wait < 0:
            raise ValueError(f"implicit_wait must be >= 0, got {self.implicit_wait}")


class BrowserSession:
    """
    Owns exactly one browser session.

    Usage:
        with BrowserSession() as session:
            session.navigate("https://example.com")
            heading = session.find_element(Locator.by_css("h1"))

    Attributes:
        open_count: Number of successful open() calls
        close_count: Number of close() calls that released a session
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or SessionConfig()
        self._playwright_factory = playwright_factory
        self._clock = clock
        self._sleep = sleep

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

        self._implicit_wait = 0.0
        self.implicit_wait = self.config.implicit_wait

        self.open_count = 0
        self.close_count = 0

    def __enter__(self) -> "BrowserSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_open(self) -> bool:
        return self._page is not None

    @property
    def page(self) -> Page:
        """The live Playwright page."""
        if self._page is None:
            raise SessionError("Browser session is not open")
        return self._page

    def open(self) -> "BrowserSession":
        """
        Launch the browser and open a fresh page.

        Raises:
            SessionError: If already open or the browser can't be started
        """
        if self.is_open:
            raise SessionError("Browser session is already open")

        try:
            self._playwright = self._playwright_factory().start()
            launcher = getattr(self._playwright, self.config.browser_type)
            self._browser = launcher.launch(
                headless=self.config.headless,
                args=list(self.config.launch_args),
            )
            self._context = self._browser.new_context(
                viewport=dict(self.config.viewport),
                ignore_https_errors=True,
            )
            self._page = self._context.new_page()
            self._page.set_default_timeout(self.config.action_timeout * 1000)
        except PlaywrightError as e:
            self._release()
            raise SessionError(
                f"Could not open {self.config.browser_type} session: {e}"
            ) from e

        self.open_count += 1
        logger.debug(
            f"Browser session opened: {self.config.browser_type} "
            f"(headless={self.config.headless})"
        )
        return self

    def close(self) -> None:
        """Close page, context, browser and Playwright. Safe to call twice."""
        if self._playwright is None and self._page is None:
            return
        self._release()
        self.close_count += 1
        logger.debug("Browser session closed")

    def _release(self) -> None:
        for name, resource, closer in (
            ("page", self._page, "close"),
            ("context", self._context, "close"),
            ("browser", self._browser, "close"),
            ("playwright", self._playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, closer)()
            except PlaywrightError as e:
                logger.warning(f"Failed to close {name}: {e}")

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

    # =========================================================================
    # Wait discipline
    # =========================================================================

    @property
    def implicit_wait(self) -> float:
        return self._implicit_wait

    @implicit_wait.setter
    def implicit_wait(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"implicit_wait must be >= 0, got {seconds}")
        if seconds > 0:
            logger.warning(
                f"Implicit wait of {seconds}s enabled: every lookup will poll. "
                "Explicit waits are refused on this session."
            )
        self._implicit_wait = float(seconds)

    def wait(
        self,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> Wait:
        """New explicit wait bound to this session."""
        return Wait(self, timeout=timeout, poll_interval=poll_interval)

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str, wait_until: str = "load") -> None:
        try:
            self.page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise translate_error(e) from e
        logger.debug(f"Navigated to: {url}")

    @property
    def current_url(self) -> str:
        return self.page.url

    @property
    def title(self) -> str:
        try:
            return self.page.title()
        except PlaywrightError as e:
            raise translate_error(e) from e

    # =========================================================================
    # Lookups
    # =========================================================================

    def find_elements(self, locator: LocatorLike) -> List[WebElement]:
        """
        All elements currently matching ``locator``.

        Zero matches is an ordinary result (empty list). This still runs the
        query over the whole document, so it is not free on large pages.
        """
        target = as_locator(locator)
        selector = target.to_selector()
        deadline = self._clock() + self._implicit_wait

        while True:
            try:
                handles = self.page.query_selector_all(selector)
            except PlaywrightError as e:
                raise translate_error(e, target) from e

            if handles or self._clock() >= deadline:
                return [WebElement(handle, target) for handle in handles]
            self._sleep(IMPLICIT_POLL_INTERVAL)

    def query_element(self, locator: LocatorLike) -> Optional[WebElement]:
        """First element matching ``locator``, or None when absent."""
        elements = self.find_elements(locator)
        return elements[0] if elements else None

    def find_element(self, locator: LocatorLike) -> WebElement:
        """
        First element matching ``locator``.

        Raises:
            ElementNotFoundError: When nothing matches. Prefer
                ``query_element``/``find_elements`` where absence is a
                valid outcome.
        """
        target = as_locator(locator)
        element = self.query_element(target)
        if element is None:
            raise ElementNotFoundError(target)
        return element

    # =========================================================================
    # Interaction helpers
    # =========================================================================

    def actions(self) -> ActionChain:
        """New fluent action chain for this session."""
        return ActionChain(self)

    def screenshot(self, path: Union[str, Path], full_page: bool = False) -> Path:
        """
        Save a PNG of the current page render.

        Args:
            path: Destination file
            full_page: Capture the full scrollable page

        Returns:
            Path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.page.screenshot(path=str(path), full_page=full_page)
        except PlaywrightError as e:
            raise translate_error(e) from e
        logger.debug(f"Screenshot saved: {path}")
        return path


__all__ = [
    "BrowserSession",
    "SessionConfig",
    "SUPPORTED_BROWSERS",
]
