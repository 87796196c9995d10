import dataclasses

import pytest

from testsuites.ui_testing.framework.exceptions import AutomationError, ElementNotFoundError
from testsuites.ui_testing.framework.locator import By, Locator
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages import SearchResultPage
from testsuites.unit.fakes import FakeElement, FakeSession


SEARCH_BOX = Locator(By.NAME, "q")
FIRST_RESULT = Locator(By.CSS_SELECTOR, "h3.r a")


@pytest.fixture
def session():
    return FakeSession()


def test_construction_does_not_touch_the_page(session):
    SearchResultPage(session)

    assert session.lookups == []


def test_duplicate_element_names_are_rejected(session):
    with pytest.raises(ValueError, match="search_box"):
        BasePage(session, elements=[("search_box", SEARCH_BOX), ("search_box", FIRST_RESULT)])


def test_bindings_are_immutable(session):
    page = SearchResultPage(session)

    with pytest.raises(TypeError):
        page.locators["search_box"] = FIRST_RESULT
    with pytest.raises(dataclasses.FrozenInstanceError):
        page.by_search_box.value = "other"


def test_tuple_element_specs_are_accepted(session):
    page = BasePage(session, elements=[("box", (By.ID, "box"))])

    assert page.locator("box") == Locator.by_id("box")


def test_unknown_element_name(session):
    page = SearchResultPage(session)

    with pytest.raises(KeyError, match="nope"):
        page.locator("nope")


def test_resolve_leaves_absent_elements_unresolved(session):
    session.add(SEARCH_BOX, FakeElement())
    page = SearchResultPage(session)

    assert page.resolve() is page
    assert page.is_resolved("search_box")
    assert not page.is_resolved("first_search_result")


def test_bind_is_resolve():
    assert SearchResultPage.bind is SearchResultPage.resolve


def test_element_retries_unresolved_lookup(session):
    page = SearchResultPage(session).resolve()
    result = FakeElement("Seattle Code Camp")
    session.add(FIRST_RESULT, result)

    assert page.first_search_result is result
    assert page.is_resolved("first_search_result")


def test_element_still_absent_raises(session):
    page = SearchResultPage(session).resolve()

    with pytest.raises(ElementNotFoundError) as excinfo:
        page.first_search_result

    assert excinfo.value.locator == FIRST_RESULT
    assert "SearchResultPage.first_search_result" in str(excinfo.value)


def test_resolved_element_is_cached(session):
    box = FakeElement()
    session.add(SEARCH_BOX, box)
    page = SearchResultPage(session).resolve()
    lookups = len(session.lookups)

    assert page.search_box is box
    assert len(session.lookups) == lookups


def test_cached_and_fresh_lookups_use_the_same_locator(session):
    session.add(SEARCH_BOX, FakeElement())
    page = SearchResultPage(session).resolve()
    page.find("search_box")
    session.find_element(page.by_search_box)

    assert set(l for l in session.lookups if l.strategy is By.NAME) == {SEARCH_BOX}
    assert page.by_search_box is page.locator("search_box")


def test_fresh_lookups_for_absent_elements(session):
    page = SearchResultPage(session)

    assert page.find_all("first_search_result") == []
    assert page.query("first_search_result") is None
    with pytest.raises(ElementNotFoundError):
        page.find("first_search_result")


def test_open_navigates_to_base_url(session):
    page = SearchResultPage(session, base_url="file:///site/search.html/")
    session.title = "Search"

    page.open()

    assert session.visited == ["file:///site/search.html"]
    assert page.is_loaded()


def test_open_rejects_the_wrong_page(session):
    page = SearchResultPage(session, base_url="file:///site/login.html")
    session.title = "Login"

    with pytest.raises(AutomationError, match="Search"):
        page.open()

    assert not page.is_loaded()


def test_page_without_title_is_always_loaded(session):
    assert BasePage(session).is_loaded()


def test_open_without_url(session):
    with pytest.raises(ValueError):
        SearchResultPage(session).open()


def test_search_types_and_submits(session):
    box = FakeElement()
    session.add(SEARCH_BOX, box)

    SearchResultPage(session).search("Seattle Code Camp")

    assert box.typed == ["Seattle Code Camp"]
    assert box.submitted


def test_first_result_text_waits_for_visibility(session):
    result = FakeElement("Seattle Code Camp", displayed=False)
    session.add(FIRST_RESULT, result)
    page = SearchResultPage(session)
    clock = session.clock
    advance = clock.sleep

    # Results render half a second after the search
    def sleep_and_render(seconds):
        advance(seconds)
        if clock.now >= 0.5:
            result.displayed = True

    clock.sleep = sleep_and_render

    assert page.first_result_text() == "Seattle Code Camp"
    assert 0.5 <= clock.now <= 0.625
