# ================================================================================
# Wait Policy Module
# ================================================================================
#
# Explicit, bounded, predicate-based waits against the live page.
#
# A condition is any callable taking the browser session. It is evaluated
# repeatedly until it returns a truthy value or the timeout is spent.
# "Element not there yet" style errors count as "not yet satisfied"; every
# other error propagates on the spot.
#
# Timing guarantees, for timeout T and poll interval p:
#   - a condition that turns true at t < T is seen by t + p
#   - a condition that never turns true fails no earlier than T and no later
#     than T plus the cost of one evaluation (the last sleep is cut short)
#
# Usage:
#   wait = Wait(session, timeout=20)
#   element = wait.until(visibility_of_element_located(page.by_search_box))
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

import allure
from loguru import logger

from .exceptions import ElementNotFoundError, StaleElementError, WaitDisciplineError


T = TypeVar("T")

Condition = Callable[[Any], T]

# Errors that mean "the page isn't there yet" while polling
TRANSIENT_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    ElementNotFoundError,
    StaleElementError,
)


@dataclass
class WaitConfig:
    """
    Configuration for explicit waits.

    Attributes:
        timeout: Total time budget in seconds
        poll_interval: Pause between evaluations in seconds
        ignored_exceptions: Extra exception types treated as "not yet"
    """
    timeout: float = 20.0
    poll_interval: float = 0.25
    ignored_exceptions: Tuple[Type[BaseException], ...] = field(default_factory=tuple)


# Pre-configured waits for common situations
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    # Default: generous budget, responsive polling
    "default": WaitConfig(),

    # Elements expected almost immediately (already rendered page)
    "fast": WaitConfig(timeout=5.0, poll_interval=0.1),

    # Results that arrive after a navigation or XHR round trip
    "page_load": WaitConfig(timeout=30.0, poll_interval=0.5),
}


class WaitTimeoutError(TimeoutError):
    """
    Raised when a wait condition is not satisfied in time.

    Attributes:
        last_value: Last value the condition returned
        last_exception: Last transient exception swallowed while polling
        attempts: Number of evaluations performed
        elapsed: Seconds spent waiting
    """

    def __init__(
        self,
        message: str,
        last_value: Any = None,
        last_exception: Optional[BaseException] = None,
        attempts: int = 0,
        elapsed: float = 0.0,
    ):
        self.last_value = last_value
        self.last_exception = last_exception
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(message)


def get_wait_config(scenario: str) -> WaitConfig:
    """
    Get wait configuration for a named scenario.

    Args:
        scenario: Scenario name (e.g., "fast", "page_load")

    Returns:
        WaitConfig for the scenario, or the default one if unknown
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


def _describe(condition: Callable[..., Any]) -> str:
    return getattr(condition, "description", None) or getattr(
        condition, "__name__", repr(condition)
    )


class Wait:
    """
    Explicit wait bound to one browser session.

    Args:
        session: Object handed to every condition (normally a BrowserSession)
        timeout: Total budget in seconds (overrides ``config``)
        poll_interval: Seconds between evaluations (overrides ``config``)
        ignored_exceptions: Extra "not yet" exception types
        config: Base configuration, defaults to ``WAIT_SCENARIOS["default"]``
        clock: Monotonic time source
        sleep: Sleep function

    Raises:
        WaitDisciplineError: If the session runs with an implicit wait
        ValueError: On a negative timeout or non-positive poll interval
    """

    def __init__(
        self,
        session: Any,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        ignored_exceptions: Tuple[Type[BaseException], ...] = (),
        config: Optional[WaitConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        config = config or get_wait_config("default")

        if getattr(session, "implicit_wait", 0) > 0:
            raise WaitDisciplineError(
                f"Session uses an implicit wait of {session.implicit_wait}s; "
                "explicit waits on top of it compound latency. "
                "Use one discipline per session."
            )

        self.session = session
        self.timeout = config.timeout if timeout is None else float(timeout)
        self.poll_interval = (
            config.poll_interval if poll_interval is None else float(poll_interval)
        )

        if self.timeout < 0:
            raise ValueError(f"Wait timeout must be >= 0, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"Poll interval must be > 0, got {self.poll_interval}")
        if self.poll_interval > self.timeout > 0:
            logger.debug(
                f"Poll interval {self.poll_interval}s exceeds timeout "
                f"{self.timeout}s; clamping"
            )
            self.poll_interval = self.timeout

        self.ignored_exceptions = (
            TRANSIENT_EXCEPTIONS
            + tuple(config.ignored_exceptions)
            + tuple(ignored_exceptions)
        )
        self._clock = clock
        self._sleep = sleep

    def until(self, condition: Condition, message: str = "") -> Any:
        """
        Wait until ``condition(session)`` returns a truthy value.

        Args:
            condition: Predicate over the session
            message: Extra context for the timeout error

        Returns:
            The first truthy value returned by the condition

        Raises:
            WaitTimeoutError: If the timeout is spent
        """
        return self._poll(condition, message, expect_truthy=True)

    def until_not(self, condition: Condition, message: str = "") -> Any:
        """
        Wait until ``condition(session)`` returns a falsy value.

        A transient exception counts as falsy: an element that can't be
        found is, for this purpose, gone.

        Returns:
            The falsy value (True when a transient exception ended the wait)
        """
        return self._poll(condition, message, expect_truthy=False)

    def _poll(self, condition: Condition, message: str, expect_truthy: bool) -> Any:
        description = _describe(condition)
        verb = "until" if expect_truthy else "until not"

        with allure.step(f"Wait {verb}: {description}"):
            start = self._clock()
            deadline = start + self.timeout
            attempts = 0
            last_value: Any = None
            last_exception: Optional[BaseException] = None

            logger.debug(
                f"Waiting {verb} {description} "
                f"(timeout={self.timeout}s, poll={self.poll_interval}s)"
            )

            while True:
                attempts += 1
                try:
                    value = condition(self.session)
                    last_value = value
                    if bool(value) == expect_truthy:
                        logger.debug(
                            f"Wait satisfied after {attempts} attempt(s) "
                            f"({self._clock() - start:.2f}s): {description}"
                        )
                        return value
                except self.ignored_exceptions as e:
                    last_exception = e
                    if not expect_truthy:
                        logger.debug(f"Wait satisfied by absence: {description}")
                        return True

                remaining = deadline - self._clock()
                if remaining <= 0:
                    break
                self._sleep(min(self.poll_interval, remaining))

            elapsed = self._clock() - start
            error_msg = (
                f"Timed out after {elapsed:.2f}s ({attempts} attempts) waiting "
                f"{verb} {description}."
            )
            if message:
                error_msg += f" {message}"
            if last_exception is not None:
                error_msg += f" Last error: {last_exception}"
            else:
                error_msg += f" Last value: {last_value!r}"

            logger.error(error_msg)
            raise WaitTimeoutError(
                error_msg,
                last_value=last_value,
                last_exception=last_exception,
                attempts=attempts,
                elapsed=elapsed,
            )


__all__ = [
    "Condition",
    "TRANSIENT_EXCEPTIONS",
    "WAIT_SCENARIOS",
    "Wait",
    "WaitConfig",
    "WaitTimeoutError",
    "get_wait_config",
]
