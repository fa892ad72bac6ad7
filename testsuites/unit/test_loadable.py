import pytest

from testsuites.unit.fakes import HOST, FakeElement
from uiready.framework.exceptions import MissingPath, TimedOut, UnsupportedComposition
from uiready.framework.loadable import Component, Loadable, Page
from uiready.framework.locator import Locator, LocatorKind
from uiready.framework.readiness import Loader, Ready
from uiready.framework.selector import Selector


class AccountPage(Page):
    def __init__(self, session):
        super().__init__(session)
        self.extend_path("/account")
        self.header = self.declare("header", self.selector("header"), Ready.visible())


class SettingsPage(AccountPage):
    def __init__(self, session):
        super().__init__(session)
        self.extend_path("/settings")
        self.spinner = self.declare("spinner", self.selector(".spinner"), loader=Loader(must_be_absent=True))


class PathlessPage(Page):
    pass


class Toolbar(Component):
    def __init__(self, owner, container=".toolbar"):
        super().__init__(owner, container)
        self.save = self.declare("save", self.within("button.save"))


class OtherToolbar(Toolbar):
    pass


# =============================================================================
# Construction
# =============================================================================

def test_loadable_requires_session():
    with pytest.raises(TypeError):
        Loadable(None)


def test_declare_requires_a_name(session):
    with pytest.raises(ValueError):
        AccountPage(session).declare("", session.selector("p"))


def test_declare_returns_target_and_defaults_to_presence(session):
    page = AccountPage(session)
    target = page.selector("p")

    assert page.declare("paragraph", target) is target
    assert page.rules[-1].ready == Ready()
    assert page.rules[-1].loader is None


def test_redeclaring_keeps_base_position(session):
    page = SettingsPage(session)
    page.declare("header", page.selector("header.sticky"))

    assert [entry.name for entry in page.rules] == ["header", "spinner"]
    assert page.rules[0].target.pattern == "header.sticky"


# =============================================================================
# Paths
# =============================================================================

def test_path_is_composed_base_first(session):
    page = SettingsPage(session)

    assert page.path_segments == ("/account", "/settings")
    assert page.get_relative_path_to() == "/account/settings"
    assert page.get_path_to() == HOST + "/account/settings"


def test_missing_path_raises(session):
    with pytest.raises(MissingPath):
        PathlessPage(session).get_relative_path_to()


def test_navigate_goes_to_full_url(session, fake_driver):
    page = SettingsPage(session)

    assert page.navigate() is page
    assert page.navigate_to_base_url() is page
    assert fake_driver.visited == [HOST + "/account/settings", HOST]


def test_get_comments_runs_script(session, fake_driver):
    fake_driver.script_result = [" build 1234 "]

    assert PathlessPage(session).get_comments() == [" build 1234 "]
    assert "createTreeWalker" in fake_driver.scripts[0][0]


# =============================================================================
# Readiness waits
# =============================================================================

def test_wait_until_ready_returns_page(session, fake_driver, fake_clock):
    fake_driver.dom["header"] = [FakeElement()]
    page = SettingsPage(session)

    assert page.wait_until_ready() is page
    assert fake_clock.sleeps == []


def test_wait_until_ready_polls_until_loader_disappears(session, fake_driver, fake_clock):
    fake_driver.dom["header"] = [FakeElement()]
    fake_driver.dom[".spinner"] = [FakeElement()]
    page = SettingsPage(session)

    original_sleep = fake_clock.sleep

    def sleep_and_finish_loading(seconds):
        original_sleep(seconds)
        if len(fake_clock.sleeps) == 2:
            fake_driver.dom[".spinner"] = []

    session.resolver.sleep = sleep_and_finish_loading

    page.wait_until_ready(timeout=5000, poll_interval=250)
    assert fake_clock.sleeps == [0.25, 0.25]


def test_wait_until_ready_times_out(session, fake_clock):
    with pytest.raises(TimedOut):
        SettingsPage(session).wait_until_ready(timeout=1000, poll_interval=250)
    assert 1000 <= fake_clock.elapsed_ms < 1250


# =============================================================================
# Components
# =============================================================================

def test_component_accepts_selector_locator_or_pattern(session):
    page = AccountPage(session)

    from_pattern = Toolbar(page, ".toolbar")
    from_locator = Toolbar(page, Locator(".toolbar"))
    from_selector = Toolbar(page, session.selector(".toolbar"))

    assert from_pattern == from_locator == from_selector
    assert from_pattern.session is session
    assert from_pattern.save.pattern == ".toolbar button.save"


def test_component_rejects_missing_container(session):
    with pytest.raises(TypeError):
        Toolbar(AccountPage(session), None)


def test_component_equality(session):
    page = AccountPage(session)
    toolbar = Toolbar(page)

    assert toolbar != Toolbar(page, ".other-toolbar")
    assert toolbar != OtherToolbar(page)
    assert toolbar != Toolbar(AccountPage(session))
    assert Toolbar.from_component(toolbar) == toolbar
    assert hash(Toolbar.from_component(toolbar)) == hash(toolbar)


def test_component_with_xpath_container_cannot_nest(session):
    container = Selector(session.resolver, "//nav", LocatorKind.XPATH)
    with pytest.raises(UnsupportedComposition):
        Toolbar(AccountPage(session), container)
