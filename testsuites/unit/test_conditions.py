import pytest

from testsuites.ui_testing.framework import conditions as EC
from testsuites.ui_testing.framework.exceptions import ElementNotFoundError
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.wait_policy import WaitTimeoutError
from testsuites.unit.fakes import FakeElement, FakeSession


RESULT = Locator.by_css("h3.r a")


@pytest.fixture
def session():
    return FakeSession()


def test_presence_raises_until_attached(session):
    condition = EC.presence_of_element_located(RESULT)

    with pytest.raises(ElementNotFoundError):
        condition(session)

    element = FakeElement("Seattle Code Camp", displayed=False)
    session.add(RESULT, element)
    assert condition(session) is element


def test_visibility_returns_element_only_when_displayed(session):
    element = FakeElement("Seattle Code Camp", displayed=False)
    session.add(RESULT, element)
    condition = EC.visibility_of_element_located(RESULT)

    assert condition(session) is False
    element.displayed = True
    assert condition(session) is element


def test_presence_of_all(session):
    condition = EC.presence_of_all_elements_located(RESULT)
    assert condition(session) == []

    session.add(RESULT, FakeElement("a"), FakeElement("b"))
    assert [e.text for e in condition(session)] == ["a", "b"]


def test_invisibility_counts_absent_as_invisible(session):
    condition = EC.invisibility_of_element_located(RESULT)
    assert condition(session) is True

    session.add(RESULT, FakeElement("a"))
    assert condition(session) is False


def test_text_present(session):
    session.add(RESULT, FakeElement("Seattle Code Camp"))

    assert EC.text_to_be_present_in_element(RESULT, "Code Camp")(session)
    assert not EC.text_to_be_present_in_element(RESULT, "Portland")(session)


def test_title_and_url(session):
    session.title = "Search - results"
    session.current_url = "file:///site/search.html?q=x"

    assert EC.title_contains("results")(session)
    assert EC.url_contains("search.html")(session)
    assert not EC.url_contains("https://")(session)


def test_conditions_carry_descriptions():
    assert EC.visibility_of_element_located(RESULT).description == "visibility of By.CSS_SELECTOR: h3.r a"


def test_wait_on_element_appearing_late(session):
    element = FakeElement("Seattle Code Camp", displayed=False)
    clock = session.clock

    def render(sess):
        if clock.now >= 0.5 and RESULT not in sess.dom:
            sess.add(RESULT, element)
        if clock.now >= 0.75:
            element.displayed = True
        return EC.visibility_of_element_located(RESULT)(sess)

    assert session.wait(timeout=2.0, poll_interval=0.125).until(render) is element
    assert 0.75 <= clock.now <= 0.875


def test_wait_on_element_that_never_shows(session):
    with pytest.raises(WaitTimeoutError) as excinfo:
        session.wait(timeout=0.5).until(EC.visibility_of_element_located(RESULT))

    assert isinstance(excinfo.value.last_exception, ElementNotFoundError)
