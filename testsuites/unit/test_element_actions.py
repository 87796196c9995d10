from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.element_actions import ActionChain, Keys, describe_keys
from testsuites.ui_testing.framework.exceptions import StaleElementError


@pytest.fixture
def recorder():
    """Session and element mocks that log calls into one ordered list."""
    calls = []
    session = MagicMock(name="session")
    keyboard = session.page.keyboard
    keyboard.type.side_effect = lambda text: calls.append(("type", text))
    keyboard.press.side_effect = lambda key: calls.append(("press", key))
    keyboard.down.side_effect = lambda key: calls.append(("down", key))
    keyboard.up.side_effect = lambda key: calls.append(("up", key))
    session.page.mouse.down.side_effect = lambda: calls.append(("mouse", "down"))
    session.page.mouse.up.side_effect = lambda: calls.append(("mouse", "up"))

    element = MagicMock(name="search_box")
    element.hover.side_effect = lambda: calls.append(("hover", None))
    element.focus.side_effect = lambda: calls.append(("focus", None))
    element.click.side_effect = lambda: calls.append(("click", None))
    return session, element, calls


def test_nothing_runs_before_perform(recorder):
    session, element, calls = recorder

    chain = ActionChain(session).move_to_element(element).send_keys("abc")

    assert calls == []
    assert len(chain) == 2


def test_steps_run_in_recorded_order(recorder):
    session, element, calls = recorder

    (
        ActionChain(session)
        .move_to_element(element)
        .send_keys("Seattle Code Camp")
        .send_keys(Keys.ENTER)
        .perform()
    )

    assert calls == [
        ("hover", None),
        ("type", "Seattle Code Camp"),
        ("press", "Enter"),
    ]


def test_modifier_and_pointer_steps(recorder):
    session, element, calls = recorder

    (
        ActionChain(session)
        .key_down(Keys.SHIFT)
        .send_keys_to_element(element, "a")
        .key_up(Keys.SHIFT)
        .click()
        .perform()
    )

    assert calls == [
        ("down", "Shift"),
        ("focus", None),
        ("type", "a"),
        ("up", "Shift"),
        ("mouse", "down"),
        ("mouse", "up"),
    ]


def test_perform_clears_the_chain(recorder):
    session, element, calls = recorder
    chain = ActionChain(session).click(element)

    chain.perform()
    chain.perform()

    assert calls == [("click", None)]
    assert len(chain) == 0


def test_failed_step_is_translated_and_chain_cleared(recorder):
    session, element, calls = recorder
    element.hover.side_effect = PlaywrightError("Element is detached from document")
    chain = ActionChain(session).move_to_element(element).send_keys("x")

    with pytest.raises(StaleElementError):
        chain.perform()

    assert calls == []
    assert len(chain) == 0


def test_reset_drops_pending_steps(recorder):
    session, element, calls = recorder
    chain = ActionChain(session).send_keys("x")

    chain.reset()
    chain.perform()

    assert calls == []


def test_step_descriptions():
    chain = ActionChain(MagicMock()).send_keys("query", Keys.ENTER).pause(0)

    assert chain.steps == ["send keys 'query' <ENTER>", "pause 0s"]


def test_describe_keys_shortens_long_text():
    text = describe_keys(("x" * 80,))

    assert text.endswith("...'")
    assert len(text) < 60
