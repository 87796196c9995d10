"""
================================================================================
Test Scenario Run
================================================================================

Per-test lifecycle of one UI scenario.

    UNINITIALIZED -> SESSION_OPEN -> INTERACTING -> ASSERTING -> CLOSED

``CLOSED`` is reached from any state through ``finish()``, which always
releases the browser session exactly once, on success and failure alike.
A screenshot of the final page render is captured according to a
``ScreenshotPolicy`` (failure-only by default).

Usage:
    with ScenarioRun("search", session_factory, policy, target_url) as run:
        run.interacting()
        ...
        run.asserting()
        assert ...

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Optional

import allure
from loguru import logger

from autotest_tools.report_tools.allure_utils import attach_failure_context, attach_screenshot

from .browser_session import BrowserSession
from .exceptions import AutomationError, ElementNotFoundError, SessionError
from .wait_policy import WaitTimeoutError

if TYPE_CHECKING:
    from .config_loader import UiSettings


class ScenarioState(str, Enum):
    UNINITIALIZED = "uninitialized"
    SESSION_OPEN = "session_open"
    INTERACTING = "interacting"
    ASSERTING = "asserting"
    CLOSED = "closed"


# Allowed forward moves; CLOSED is reachable from anywhere via finish()
_TRANSITIONS: Dict[ScenarioState, FrozenSet[ScenarioState]] = {
    ScenarioState.UNINITIALIZED: frozenset({ScenarioState.SESSION_OPEN}),
    ScenarioState.SESSION_OPEN: frozenset({ScenarioState.INTERACTING, ScenarioState.ASSERTING}),
    ScenarioState.INTERACTING: frozenset({ScenarioState.INTERACTING, ScenarioState.ASSERTING}),
    ScenarioState.ASSERTING: frozenset({ScenarioState.ASSERTING}),
    ScenarioState.CLOSED: frozenset(),
}


class ScenarioStateError(RuntimeError):
    """Raised on a lifecycle transition the scenario does not allow."""
    pass


class FailureKind(str, Enum):
    ELEMENT_NOT_FOUND = "element_not_found"
    TIMEOUT = "timeout"
    ASSERTION = "assertion"
    SESSION = "session"
    UNEXPECTED = "unexpected"


def classify_failure(error: BaseException) -> FailureKind:
    """Map an exception onto the scenario failure taxonomy."""
    if isinstance(error, AssertionError):
        return FailureKind.ASSERTION
    if isinstance(error, ElementNotFoundError):
        return FailureKind.ELEMENT_NOT_FOUND
    if isinstance(error, (WaitTimeoutError, TimeoutError)):
        return FailureKind.TIMEOUT
    if isinstance(error, SessionError):
        return FailureKind.SESSION
    return FailureKind.UNEXPECTED


@dataclass(frozen=True)
class ScreenshotPolicy:
    """
    When and where the result screenshot is written.

    Attributes:
        on_failure_only: Capture only when the scenario failed
        directory: Directory of the artifact
        filename: Fixed artifact file name
        attach_to_allure: Also attach the image to the Allure report
    """
    on_failure_only: bool = True
    directory: Path = Path("reports/screenshots")
    filename: str = "result.png"
    attach_to_allure: bool = True

    @property
    def path(self) -> Path:
        return Path(self.directory) / self.filename

    def should_capture(self, failed: bool) -> bool:
        return failed or not self.on_failure_only

    @classmethod
    def from_settings(cls, settings: "UiSettings") -> "ScreenshotPolicy":
        """Policy from the configured UI settings."""
        return cls(
            on_failure_only=settings.screenshot_on_failure_only,
            directory=Path(settings.screenshot_dir),
            filename=settings.screenshot_name,
        )


class ScenarioRun:
    """
    One scenario run: one session, opened at start, released at finish.

    Args:
        name: Scenario name used in logs and reports
        session_factory: Callable returning a new, unopened BrowserSession
        screenshot_policy: Screenshot capture policy
        target_url: Page to navigate to right after the session opens
    """

    def __init__(
        self,
        name: str,
        session_factory: Callable[[], BrowserSession],
        screenshot_policy: Optional[ScreenshotPolicy] = None,
        target_url: Optional[str] = None,
    ):
        self.name = name
        self.screenshot_policy = screenshot_policy or ScreenshotPolicy()
        self.target_url = target_url
        self.state = ScenarioState.UNINITIALIZED
        self.failure_kind: Optional[FailureKind] = None
        self.screenshot_path: Optional[Path] = None

        self._session_factory = session_factory
        self._session: Optional[BrowserSession] = None

    def __enter__(self) -> "ScenarioRun":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.finish(exc_val)

    @property
    def session(self) -> BrowserSession:
        if self._session is None or self.state is ScenarioState.CLOSED:
            raise ScenarioStateError(f"Scenario {self.name!r} has no open session")
        return self._session

    def _move(self, target: ScenarioState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise ScenarioStateError(
                f"Scenario {self.name!r}: cannot go from {self.state.value} to {target.value}"
            )
        logger.debug(f"Scenario {self.name!r}: {self.state.value} -> {target.value}")
        self.state = target

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> "ScenarioRun":
        """Open the session and navigate to the target page."""
        if self.state is not ScenarioState.UNINITIALIZED:
            raise ScenarioStateError(f"Scenario {self.name!r} already started")

        logger.info(f"Scenario {self.name!r} starting")
        self._session = self._session_factory()
        try:
            self._session.open()
            self._move(ScenarioState.SESSION_OPEN)
            if self.target_url:
                with allure.step(f"Navigate to {self.target_url}"):
                    self._session.navigate(self.target_url)
        except BaseException as e:
            self.finish(e)
            raise
        return self

    def interacting(self) -> "ScenarioRun":
        self._move(ScenarioState.INTERACTING)
        return self

    def asserting(self) -> "ScenarioRun":
        self._move(ScenarioState.ASSERTING)
        return self

    def capture_screenshot(self) -> Optional[Path]:
        """Write the screenshot artifact to the policy's fixed path."""
        policy = self.screenshot_policy
        path = self.session.screenshot(policy.path)
        if policy.attach_to_allure:
            attach_screenshot(path, name=f"{self.name}: {policy.filename}")
        self.screenshot_path = path
        return path

    def finish(self, error: Optional[BaseException] = None) -> None:
        """
        End the scenario: screenshot per policy, diagnostics, session release.

        Runs at most once; later calls are no-ops.

        Args:
            error: Exception that ended the scenario, None on success
        """
        if self.state is ScenarioState.CLOSED:
            return

        failed = error is not None
        last_state = self.state

        try:
            if failed:
                self._report_failure(error, last_state)
            if (
                self._session is not None
                and self._session.is_open
                and self.screenshot_policy.should_capture(failed)
            ):
                try:
                    self.capture_screenshot()
                except (AutomationError, OSError) as e:
                    logger.warning(f"Scenario {self.name!r}: screenshot capture failed: {e}")
        finally:
            if self._session is not None:
                self._session.close()
            self.state = ScenarioState.CLOSED
            outcome = "failed" if failed else "passed"
            logger.info(f"Scenario {self.name!r} {outcome}; session closed")

    def _report_failure(self, error: BaseException, last_state: ScenarioState) -> None:
        self.failure_kind = classify_failure(error)
        logger.error(
            f"Scenario {self.name!r} failed in state {last_state.value}: "
            f"{self.failure_kind.value} - {type(error).__name__}: {error}"
        )
        if self.failure_kind is not FailureKind.ASSERTION:
            logger.warning(
                f"Scenario {self.name!r} ended with a {self.failure_kind.value} failure "
                "instead of an assertion; the test itself likely needs fixing."
            )

        current_url = None
        if self._session is not None and self._session.is_open:
            current_url = self._session.current_url
        attach_failure_context(
            kind=self.failure_kind.value,
            state=last_state.value,
            error=error,
            url=current_url,
        )


__all__ = [
    "FailureKind",
    "ScenarioRun",
    "ScenarioState",
    "ScenarioStateError",
    "ScreenshotPolicy",
    "classify_failure",
]
