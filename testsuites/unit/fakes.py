"""
In-memory stand-ins for the browser session, used by the unit tests.

FakeSession keeps a tiny "DOM": a dict of Locator -> list of FakeElement.
Tests mutate it to make elements appear, disappear or become visible.
"""

from pathlib import Path
from typing import Dict, List, Optional

from testsuites.ui_testing.framework.exceptions import ElementNotFoundError
from testsuites.ui_testing.framework.locator import Locator, as_locator
from testsuites.ui_testing.framework.wait_policy import Wait


class FakeClock:
    """Manual monotonic clock; sleep() advances it."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeElement:
    def __init__(self, text: str = "", displayed: bool = True, locator: Optional[Locator] = None):
        self.text = text
        self.displayed = displayed
        self.locator = locator
        self.typed: List[str] = []
        self.submitted = False
        self.hovered = False
        self.clicked = False
        self.focused = False

    def __repr__(self) -> str:
        return f"<FakeElement {self.text!r}>"

    def is_displayed(self) -> bool:
        return self.displayed

    def send_keys(self, *values) -> None:
        self.typed.extend(str(getattr(v, "value", v)) for v in values)

    def submit(self) -> None:
        self.submitted = True

    def hover(self) -> None:
        self.hovered = True

    def click(self) -> None:
        self.clicked = True

    def focus(self) -> None:
        self.focused = True


class FakeSession:
    """Duck-typed BrowserSession backed by a dict."""

    def __init__(self, dom: Optional[Dict[Locator, List[FakeElement]]] = None, clock: FakeClock = None):
        self.dom: Dict[Locator, List[FakeElement]] = dom or {}
        self.clock = clock or FakeClock()
        self.implicit_wait = 0.0
        self.lookups: List[Locator] = []
        self.visited: List[str] = []
        self.open_count = 0
        self.close_count = 0
        self.is_open = False
        self.fail_screenshot: Optional[Exception] = None
        self.fail_open: Optional[Exception] = None
        self.current_url = "about:blank"
        self.title = "Fake"

    # Lifecycle

    def open(self) -> "FakeSession":
        if self.fail_open is not None:
            raise self.fail_open
        self.open_count += 1
        self.is_open = True
        return self

    def close(self) -> None:
        if not self.is_open:
            return
        self.close_count += 1
        self.is_open = False

    # Page

    def navigate(self, url: str) -> None:
        self.visited.append(url)
        self.current_url = url

    def add(self, locator: Locator, *elements: FakeElement) -> None:
        self.dom.setdefault(locator, []).extend(elements)

    def find_elements(self, locator) -> List[FakeElement]:
        target = as_locator(locator)
        self.lookups.append(target)
        return list(self.dom.get(target, []))

    def query_element(self, locator) -> Optional[FakeElement]:
        elements = self.find_elements(locator)
        return elements[0] if elements else None

    def find_element(self, locator) -> FakeElement:
        element = self.query_element(locator)
        if element is None:
            raise ElementNotFoundError(as_locator(locator))
        return element

    def screenshot(self, path) -> Path:
        if self.fail_screenshot is not None:
            raise self.fail_screenshot
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x89PNG fake")
        return path

    def wait(self, timeout: float = 2.0, poll_interval: float = 0.1) -> Wait:
        return Wait(
            self,
            timeout=timeout,
            poll_interval=poll_interval,
            clock=self.clock,
            sleep=self.clock.sleep,
        )
