import pytest

from testsuites.unit.fakes import FakeElement
from uiready.framework.exceptions import (
    ElementNotFound,
    PredicateNoMatch,
    PredicateSourceEmpty,
    TimedOut,
)
from uiready.framework.locator import Locator
from uiready.framework.resolver import ElementResolver


# =============================================================================
# Resolution
# =============================================================================

def test_resolver_requires_driver():
    with pytest.raises(TypeError):
        ElementResolver(None)


def test_resolve_one_returns_first_match(resolver, fake_driver):
    first, second = FakeElement("a"), FakeElement("b")
    fake_driver.dom["li"] = [first, second]

    assert resolver.resolve_one(Locator("li")) is first
    assert resolver.resolve_all(Locator("li")) == [first, second]


def test_resolve_one_raises_when_nothing_matches(resolver):
    with pytest.raises(ElementNotFound) as exc_info:
        resolver.resolve_one(Locator("#missing"))
    assert exc_info.value.locator == Locator("#missing")


def test_resolution_is_never_cached(resolver, fake_driver):
    locator = Locator("#status")
    fake_driver.dom["#status"] = [FakeElement("loading")]
    assert resolver.resolve_one(locator).get_text() == "loading"

    fake_driver.dom["#status"] = [FakeElement("done")]
    assert resolver.resolve_one(locator).get_text() == "done"
    assert fake_driver.lookup_count("#status") == 2


def test_is_present_never_raises(resolver, fake_driver):
    assert resolver.is_present(Locator("#missing")) is False
    fake_driver.dom["#here"] = [FakeElement()]
    assert resolver.is_present(Locator("#here")) is True


def test_resolve_where_picks_first_satisfying_element(resolver, fake_driver):
    fake_driver.dom["li"] = [FakeElement("one"), FakeElement("two"), FakeElement("two")]

    match = resolver.resolve_where(Locator("li"), lambda el: el.get_text() == "two")
    assert match is fake_driver.dom["li"][1]

    matches = resolver.resolve_all_where(Locator("li"), lambda el: el.get_text() == "two")
    assert matches == fake_driver.dom["li"][1:]


def test_predicate_on_empty_source(resolver):
    with pytest.raises(PredicateSourceEmpty):
        resolver.resolve_where(Locator("li"), lambda el: True)
    with pytest.raises(PredicateSourceEmpty):
        resolver.resolve_all_where(Locator("li"), lambda el: True)


def test_predicate_without_match(resolver, fake_driver):
    fake_driver.dom["li"] = [FakeElement("one"), FakeElement("two")]

    with pytest.raises(PredicateNoMatch) as exc_info:
        resolver.resolve_where(Locator("li"), lambda el: el.get_text() == "three")
    assert exc_info.value.candidates == 2

    with pytest.raises(PredicateNoMatch):
        resolver.resolve_all_where(Locator("li"), lambda el: False)


# =============================================================================
# Waiting
# =============================================================================

def test_wait_until_returns_immediately_without_sleeping(resolver, fake_driver, fake_clock):
    element = FakeElement("ready")
    fake_driver.dom["#banner"] = [element]

    assert resolver.wait_until(Locator("#banner"), lambda el: el.is_displayed()) is element
    assert fake_clock.sleeps == []


def test_wait_until_polls_until_predicate_passes(resolver, fake_driver, fake_clock):
    element = FakeElement(displayed=False)
    fake_driver.dom["#banner"] = [element]

    def becomes_visible(el):
        if len(fake_clock.sleeps) == 3:
            element.displayed = True
        return el.is_displayed()

    resolver.wait_until(Locator("#banner"), becomes_visible, timeout=5000, poll_interval=100)

    assert fake_clock.sleeps == [0.1, 0.1, 0.1]


def test_wait_until_times_out_with_cause(resolver, fake_clock):
    with pytest.raises(TimedOut) as exc_info:
        resolver.wait_until(Locator("#never"), lambda el: True, timeout=1000, poll_interval=250)

    assert isinstance(exc_info.value.cause, ElementNotFound)
    assert exc_info.value.__cause__ is exc_info.value.cause
    assert "1000 milliseconds" in str(exc_info.value)
    assert 1000 <= fake_clock.elapsed_ms < 1000 + 250


def test_wait_until_times_out_without_cause_when_element_exists(resolver, fake_driver, fake_clock):
    fake_driver.dom["#banner"] = [FakeElement(displayed=False)]

    with pytest.raises(TimedOut) as exc_info:
        resolver.wait_until(Locator("#banner"), lambda el: el.is_displayed(), timeout=750, poll_interval=250)

    assert exc_info.value.cause is None
    assert 750 <= fake_clock.elapsed_ms < 750 + 250


def test_wait_until_keeps_polling_after_interrupted_sleep(fake_driver, fake_clock):
    calls = []

    def flaky_sleep(seconds):
        calls.append(seconds)
        fake_clock.sleep(seconds)
        if len(calls) == 1:
            raise InterruptedError()

    resolver = ElementResolver(fake_driver, clock=fake_clock.now, sleep=flaky_sleep)
    element = FakeElement()

    def appears_after_two_polls(el):
        return len(calls) >= 2

    fake_driver.dom["#late"] = [element]
    assert resolver.wait_until(Locator("#late"), appears_after_two_polls, timeout=2000, poll_interval=100) is element
    assert len(calls) == 2


def test_wait_until_condition_delegates_to_driver(resolver, fake_driver):
    fake_driver.dom["#ok"] = [FakeElement()]
    seen = []

    def condition(native, timeout):
        seen.append(timeout)
        return bool(native)

    resolver.wait_until_condition(Locator("#ok"), condition, timeout=300)
    assert seen == [300]

    with pytest.raises(TimedOut):
        resolver.wait_until_condition(Locator("#missing"), condition, timeout=300)
